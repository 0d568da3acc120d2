"""
Risk Scoring Module

Calculate rockfall risk probabilities and bands from sensor readings.
"""

from .risk_scorer import (
    Reading,
    RiskAssessment,
    RiskFactors,
    RiskScorer,
    assess_risk,
    classify_probability,
    summarize_assessments,
)
from .mine_selection import SelectionScorer, assess_mine_selection

__all__ = [
    "Reading",
    "RiskAssessment",
    "RiskFactors",
    "RiskScorer",
    "SelectionScorer",
    "assess_risk",
    "assess_mine_selection",
    "classify_probability",
    "summarize_assessments",
]
