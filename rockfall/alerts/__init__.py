"""
Alerts Module

Alert log with simulated delivery, plus banner and recommendation wording.
"""

from .alert_log import CHANNELS, Alert, AlertLog
from .messages import alert_banner, alert_message, format_elapsed, recommendation

__all__ = [
    "CHANNELS",
    "Alert",
    "AlertLog",
    "alert_banner",
    "alert_message",
    "format_elapsed",
    "recommendation",
]
