"""
Dashboard state

The dashboard's display state is derived from user events through a single
transition function, ``transition(state, event) -> state``. States are
immutable and independent of any UI framework.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Tuple
import logging

import numpy as np

from .alerts import AlertLog
from .exceptions import UnknownEventError
from .mines import Mine
from .risk_scoring import RiskAssessment, SelectionScorer, assess_risk
from .simulation import LocationData, make_rng, simulate_location_reading, simulate_mine_reading

logger = logging.getLogger(__name__)

TABS: Tuple[str, ...] = ("overview", "search", "elevation", "data", "forecast", "alerts")


@dataclass(frozen=True)
class DashboardState:
    selected_mine: Optional[Mine] = None
    location: Optional[LocationData] = None
    assessment: Optional[RiskAssessment] = None
    # Driven by ChangeTab; st.tabs keeps its own selection and never reports it
    active_tab: str = "overview"
    show_alert: bool = False
    alerts: AlertLog = field(default_factory=AlertLog)


# Events

@dataclass(frozen=True)
class SelectMine:
    mine: Mine


@dataclass(frozen=True)
class AnalyzeLocation:
    name: str


@dataclass(frozen=True)
class ChangeTab:
    tab: str


@dataclass(frozen=True)
class DismissAlert:
    pass


@dataclass(frozen=True)
class SendAlert:
    channel: str


@dataclass(frozen=True)
class ResolveAlert:
    alert_id: str


@dataclass(frozen=True)
class ResolveDueAlerts:
    now: datetime


@dataclass(frozen=True)
class SetAutoAlerts:
    enabled: bool


def tab_available(state: DashboardState, tab: str) -> bool:
    """Whether a tab has content to show, rather than a placeholder"""
    if tab == "elevation":
        return state.selected_mine is not None
    if tab in ("forecast", "alerts"):
        return state.selected_mine is not None and state.assessment is not None
    return tab in TABS


def transition(
    state: DashboardState,
    event,
    rng: Optional[np.random.Generator] = None,
    selection_scorer: Optional[SelectionScorer] = None
) -> DashboardState:
    """
    Apply one event to the dashboard state

    Args:
        state: Current state
        event: One of the event classes above
        rng: Generator for simulated readings and alert delivery
        selection_scorer: Scorer used when a mine is selected

    Returns:
        The new state; the input state is never modified
    """
    if isinstance(event, SelectMine):
        rng = rng if rng is not None else make_rng()
        scorer = selection_scorer or SelectionScorer()
        mine = event.mine

        location = simulate_mine_reading(mine, rng)
        assessment = scorer.assess(location.reading, mine.status)
        logger.info(f"Selected {mine.name}: {assessment.probability}% {assessment.level}")

        return replace(
            state,
            selected_mine=mine,
            location=location,
            assessment=assessment,
            show_alert=assessment.level == "High",
            alerts=state.alerts.auto_alert(assessment.level, mine.name),
        )

    if isinstance(event, AnalyzeLocation):
        rng = rng if rng is not None else make_rng()
        location = simulate_location_reading(event.name, rng)
        assessment = assess_risk(location.reading)
        return replace(
            state,
            selected_mine=None,
            location=location,
            assessment=assessment,
            show_alert=assessment.level == "High",
        )

    if isinstance(event, ChangeTab):
        if event.tab not in TABS:
            raise ValueError(f"Unknown tab '{event.tab}', expected one of {list(TABS)}")
        return replace(state, active_tab=event.tab)

    if isinstance(event, DismissAlert):
        return replace(state, show_alert=False)

    if isinstance(event, SendAlert):
        if state.selected_mine is None or state.assessment is None:
            logger.warning("Alert not sent: no mine selected")
            return state
        alerts, _ = state.alerts.send(event.channel, state.assessment.level, state.selected_mine.name)
        return replace(state, alerts=alerts)

    if isinstance(event, ResolveAlert):
        rng = rng if rng is not None else make_rng()
        return replace(state, alerts=state.alerts.resolve(event.alert_id, rng))

    if isinstance(event, ResolveDueAlerts):
        rng = rng if rng is not None else make_rng()
        return replace(state, alerts=state.alerts.resolve_due(event.now, rng))

    if isinstance(event, SetAutoAlerts):
        alerts = state.alerts.set_auto_alerts(event.enabled)
        # Re-enabling while a High risk mine is selected alerts immediately
        if state.selected_mine is not None and state.assessment is not None:
            alerts = alerts.auto_alert(state.assessment.level, state.selected_mine.name)
        return replace(state, alerts=alerts)

    raise UnknownEventError(f"Unhandled dashboard event: {event!r}")
