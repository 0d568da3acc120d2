"""
Rockfall Risk Monitor

Simulated mine-safety telemetry and rockfall risk assessment.
"""

from .exceptions import InvalidInputError, RockfallError
from .risk_scoring import Reading, RiskAssessment, RiskScorer, assess_risk

__version__ = "1.0.0"

__all__ = [
    "Reading",
    "RiskAssessment",
    "RiskScorer",
    "assess_risk",
    "InvalidInputError",
    "RockfallError",
]
