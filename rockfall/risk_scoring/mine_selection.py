"""
Mine selection scoring

The overview panel scores a freshly selected mine with its own formula:
an uncapped sum of raw readings and thresholds on slope alone. It does not
agree with RiskScorer and is kept here, unmodified, behind the
``SELECTION_FORMULA`` setting.
"""

from typing import Optional
import logging

from .. import config
from .risk_scorer import Reading, RiskAssessment, RiskFactors, RiskScorer, round_half_up

logger = logging.getLogger(__name__)

WEIGHTED = "weighted"
LEGACY = "legacy"


def assess_mine_selection(reading: Reading, status: str) -> RiskAssessment:
    """
    Score a reading with the overview formula

    Args:
        reading: Simulated reading for the selected mine
        status: Mine status; sites under construction are always Medium

    Returns:
        RiskAssessment whose probability is NOT capped at 100
    """
    if status == "Under Construction":
        level = "Medium"
    elif reading.slope > 35:
        level = "High"
    elif reading.slope > 25:
        level = "Medium"
    else:
        level = "Low"

    probability = round_half_up(reading.slope * 2 + reading.rainfall * 1.5 + reading.vibration * 3)

    return RiskAssessment(
        probability=probability,
        level=level,
        factors=RiskFactors(
            slope_instability=round_half_up(reading.slope * 2),
            vibration_patterns=round_half_up(reading.vibration * 8),
            weather_conditions=round_half_up(reading.rainfall * 3),
        ),
    )


class SelectionScorer:
    """Scores a mine selection with the configured formula"""

    def __init__(self, formula: Optional[str] = None, scorer: Optional[RiskScorer] = None):
        self.formula = (formula or config.SELECTION_FORMULA).lower()
        if self.formula not in (WEIGHTED, LEGACY):
            raise ValueError(f"Unknown selection formula '{self.formula}', expected '{WEIGHTED}' or '{LEGACY}'")
        self.scorer = scorer or RiskScorer(config.FACTOR_WEIGHTS)

    def assess(self, reading: Reading, status: str) -> RiskAssessment:
        if self.formula == LEGACY:
            return assess_mine_selection(reading, status)
        return self.scorer.assess(reading)
