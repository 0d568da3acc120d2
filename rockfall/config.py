"""
Configuration for the Rockfall Risk Monitor.

Centralizes factor weights, normalization scales, risk band thresholds,
alerting behaviour and service settings. Every setting can be overridden
through a ``ROCKFALL_*`` environment variable.
"""

import os
from typing import Dict, List, Tuple


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value in (None, ""):
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Risk factor weights (must sum to 1.0)
# ---------------------------------------------------------------------------
FACTOR_WEIGHTS: Dict[str, float] = {
    "slope": _env_float("ROCKFALL_WEIGHT_SLOPE", 0.4),
    "vibration": _env_float("ROCKFALL_WEIGHT_VIBRATION", 0.3),
    "weather": _env_float("ROCKFALL_WEIGHT_WEATHER", 0.3),
}

# ---------------------------------------------------------------------------
# Normalization scales: raw value that maps to a factor score of 100
# ---------------------------------------------------------------------------
SLOPE_SCALE_DEG: float = 60.0
VIBRATION_SCALE: float = 100.0
WEATHER_SCALE: float = 60.0
REFERENCE_TEMPERATURE_C: float = 25.0

# Physical limit for a slope angle
MAX_SLOPE_DEG: float = 90.0

# ---------------------------------------------------------------------------
# Risk bands (lower bound inclusive, evaluated high to low)
# ---------------------------------------------------------------------------
RISK_BANDS: List[Tuple[int, str]] = [
    (75, "High"),
    (50, "Medium"),
    (25, "Low"),
    (0, "Safe"),
]

RISK_LEVELS: List[str] = ["Safe", "Low", "Medium", "High"]

# ---------------------------------------------------------------------------
# Mine selection scoring: "weighted" (RiskScorer) or "legacy" (overview formula)
# ---------------------------------------------------------------------------
SELECTION_FORMULA: str = os.getenv("ROCKFALL_SELECTION_FORMULA", "weighted")

# ---------------------------------------------------------------------------
# Alerts
# ---------------------------------------------------------------------------
AUTO_ALERTS_ENABLED: bool = _env_bool("ROCKFALL_AUTO_ALERTS", True)
ALERT_HISTORY_SIZE: int = _env_int("ROCKFALL_ALERT_HISTORY", 10)
ALERT_SUCCESS_RATE: float = _env_float("ROCKFALL_ALERT_SUCCESS_RATE", 0.9)
ALERT_DISPATCH_DELAY_S: float = _env_float("ROCKFALL_ALERT_DELAY", 2.0)

ALERT_RECIPIENTS: Dict[str, str] = {
    "email": "safety@miningcompany.com",
    "sms": "+1-555-0123",
    "call": "+1-555-0456",
    "push": "Mobile App Users",
}

# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------
# None means a fresh, unseeded generator per request
DEFAULT_SEED = os.getenv("ROCKFALL_SEED")
DEFAULT_SEED = int(DEFAULT_SEED) if DEFAULT_SEED not in (None, "") else None

# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------
API_HOST: str = os.getenv("ROCKFALL_API_HOST", "0.0.0.0")
API_PORT: int = _env_int("ROCKFALL_API_PORT", 8000)
API_URL: str = os.getenv("ROCKFALL_API_URL", "")
API_TIMEOUT_S: float = _env_float("ROCKFALL_API_TIMEOUT", 10.0)
LOG_LEVEL: str = os.getenv("ROCKFALL_LOG_LEVEL", "INFO")
