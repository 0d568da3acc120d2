"""
Alert log

Records dispatched alerts with a pending -> sent/failed lifecycle. Delivery
is simulated: resolving a pending alert succeeds with a fixed probability.
The log is immutable; every operation returns a new log.
"""

from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timedelta
from typing import Dict, Optional, Tuple
import logging

import numpy as np

from .. import config
from .messages import alert_message, auto_alert_message

logger = logging.getLogger(__name__)

CHANNELS = ("email", "sms", "call", "push")
STATUSES = ("sent", "pending", "failed")


@dataclass(frozen=True)
class Alert:
    id: str
    channel: str
    status: str
    recipient: str
    message: str
    timestamp: datetime
    risk_level: str

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass(frozen=True)
class AlertLog:
    alerts: Tuple[Alert, ...] = ()
    sent_count: int = 0
    auto_alerts_enabled: bool = config.AUTO_ALERTS_ENABLED
    history_size: int = config.ALERT_HISTORY_SIZE
    next_id: int = field(default=1)

    def _push(self, alert: Alert, **changes) -> "AlertLog":
        alerts = (alert,) + self.alerts[: self.history_size - 1]
        return replace(self, alerts=alerts, next_id=self.next_id + 1, **changes)

    def send(
        self,
        channel: str,
        level: str,
        mine_name: str,
        now: Optional[datetime] = None
    ) -> Tuple["AlertLog", Alert]:
        """
        Queue a manual alert as pending

        Returns:
            (new log, the queued alert)
        """
        if channel not in CHANNELS:
            raise ValueError(f"Unknown alert channel '{channel}', expected one of {list(CHANNELS)}")

        alert = Alert(
            id=f"alert-{self.next_id}",
            channel=channel,
            status="pending",
            recipient=config.ALERT_RECIPIENTS[channel],
            message=alert_message(level, mine_name),
            timestamp=now or datetime.now(),
            # Alerts are never filed as Safe
            risk_level="Low" if level == "Safe" else level,
        )
        logger.info(f"Queued {channel} alert {alert.id} for {mine_name} ({level})")
        return self._push(alert), alert

    def resolve(self, alert_id: str, rng: np.random.Generator) -> "AlertLog":
        """Settle a pending alert as sent or failed"""
        target = next((a for a in self.alerts if a.id == alert_id), None)
        if target is None or target.status != "pending":
            logger.warning(f"No pending alert {alert_id} to resolve")
            return self

        status = "sent" if rng.random() > 1 - config.ALERT_SUCCESS_RATE else "failed"
        if status == "failed":
            logger.error(f"Delivery of {target.channel} alert {alert_id} to {target.recipient} failed")

        alerts = tuple(replace(a, status=status) if a.id == alert_id else a for a in self.alerts)
        return replace(self, alerts=alerts, sent_count=self.sent_count + 1)

    def resolve_due(
        self,
        now: datetime,
        rng: np.random.Generator,
        delay: float = config.ALERT_DISPATCH_DELAY_S
    ) -> "AlertLog":
        """
        Settle every pending alert queued at least ``delay`` seconds before ``now``

        Alerts are settled oldest first, one delivery draw each.
        """
        cutoff = now - timedelta(seconds=delay)
        due = [a.id for a in reversed(self.alerts) if a.status == "pending" and a.timestamp <= cutoff]

        log = self
        for alert_id in due:
            log = log.resolve(alert_id, rng)
        return log

    def next_due(self, delay: float = config.ALERT_DISPATCH_DELAY_S) -> Optional[datetime]:
        """When the oldest pending alert becomes due, or None with nothing pending"""
        pending = [a.timestamp for a in self.alerts if a.status == "pending"]
        if not pending:
            return None
        return min(pending) + timedelta(seconds=delay)

    def auto_alert(self, level: str, mine_name: str, now: Optional[datetime] = None) -> "AlertLog":
        """Record an automatic email alert when the risk is High"""
        if level != "High" or not self.auto_alerts_enabled:
            return self

        alert = Alert(
            id=f"alert-{self.next_id}",
            channel="email",
            status="sent",
            recipient=config.ALERT_RECIPIENTS["email"],
            message=auto_alert_message(mine_name),
            timestamp=now or datetime.now(),
            risk_level="High",
        )
        logger.warning(f"Automatic high risk alert for {mine_name}")
        return self._push(alert, sent_count=self.sent_count + 1)

    def set_auto_alerts(self, enabled: bool) -> "AlertLog":
        return replace(self, auto_alerts_enabled=enabled)

    def status_counts(self) -> Dict[str, int]:
        counts = {status: 0 for status in STATUSES}
        for alert in self.alerts:
            counts[alert.status] += 1
        return counts
