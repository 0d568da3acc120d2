"""
Risk Scoring Module

Calculates the rockfall risk probability for a sensor reading from three
normalized factors (slope instability, vibration patterns, weather
conditions) and classifies it into a risk band.
"""

import math
import numbers
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd
import logging

from .. import config
from ..exceptions import InvalidInputError

logger = logging.getLogger(__name__)

READING_FIELDS = ("slope", "vibration", "rainfall", "temperature")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives"""
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(max(value, low), high)


def _check_number(field: str, value: Any) -> float:
    if value is None:
        raise InvalidInputError(field, "missing")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(field, f"expected a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(field, "must be finite")
    return value


@dataclass(frozen=True)
class Reading:
    """Snapshot of slope, vibration, rainfall and temperature at one location"""

    slope: float
    vibration: float
    rainfall: float
    temperature: float

    def __post_init__(self):
        for field in READING_FIELDS:
            object.__setattr__(self, field, _check_number(field, getattr(self, field)))

        if self.slope < 0 or self.slope > config.MAX_SLOPE_DEG:
            raise InvalidInputError("slope", f"must be between 0 and {config.MAX_SLOPE_DEG:g} degrees")
        if self.vibration < 0:
            raise InvalidInputError("vibration", "must not be negative")
        if self.rainfall < 0:
            raise InvalidInputError("rainfall", "must not be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Reading":
        """Build a reading from a dict, rejecting missing fields"""
        if not isinstance(data, Mapping):
            raise InvalidInputError("reading", f"expected a mapping, got {type(data).__name__}")
        for field in READING_FIELDS:
            if field not in data:
                raise InvalidInputError(field, "missing")
        return cls(**{field: data[field] for field in READING_FIELDS})

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class RiskFactors:
    slope_instability: int
    vibration_patterns: int
    weather_conditions: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "slopeInstability": self.slope_instability,
            "vibrationPatterns": self.vibration_patterns,
            "weatherConditions": self.weather_conditions,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Outcome of scoring one reading"""

    probability: int
    level: str
    factors: RiskFactors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "probability": self.probability,
            "level": self.level,
            "factors": self.factors.to_dict(),
        }


def classify_probability(probability: float) -> str:
    """Map a 0-100 probability onto its risk band"""
    for lower_bound, level in config.RISK_BANDS:
        if probability >= lower_bound:
            return level
    return config.RISK_BANDS[-1][1]


class RiskScorer:
    """Calculate rockfall risk from slope, vibration and weather factors"""

    # Default weights for each factor (must sum to 1.0)
    DEFAULT_WEIGHTS = {
        "slope": 0.4,
        "vibration": 0.3,
        "weather": 0.3,
    }

    def __init__(self, weights: Optional[Dict[str, float]] = None):
        """
        Initialize risk scorer

        Args:
            weights: Custom weights for each factor. If None, uses defaults.
        """
        self.weights = dict(weights) if weights is not None else dict(self.DEFAULT_WEIGHTS)

        unknown = set(self.weights) - set(self.DEFAULT_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown risk factors in weights: {sorted(unknown)}")
        for factor in self.DEFAULT_WEIGHTS:
            self.weights.setdefault(factor, 0.0)

        # Validate weights sum to 1.0
        total_weight = sum(self.weights.values())
        if total_weight <= 0:
            raise ValueError("Risk factor weights must sum to a positive value")
        if not np.isclose(total_weight, 1.0):
            logger.warning(f"Weights sum to {total_weight:.2f}, normalizing to 1.0")
            self.weights = {k: v / total_weight for k, v in self.weights.items()}

    @staticmethod
    def factor_scores(reading: Reading) -> Tuple[float, float, float]:
        """
        Normalize a reading into its three factor scores

        Returns:
            (slope, vibration, weather) scores, each clamped to 0-100
        """
        slope_risk = _clamp(reading.slope / config.SLOPE_SCALE_DEG * 100)
        vibration_risk = _clamp(reading.vibration / config.VIBRATION_SCALE * 100)

        # Rainfall plus deviation from a temperate 25C
        weather_load = reading.rainfall + abs(reading.temperature - config.REFERENCE_TEMPERATURE_C)
        weather_risk = _clamp(weather_load / config.WEATHER_SCALE * 100)

        return slope_risk, vibration_risk, weather_risk

    def assess(self, reading: Union[Reading, Mapping[str, Any]]) -> RiskAssessment:
        """
        Calculate the risk assessment for a single reading

        Returns:
            RiskAssessment with integer probability 0-100, band and factors
        """
        if not isinstance(reading, Reading):
            reading = Reading.from_mapping(reading)

        slope_risk, vibration_risk, weather_risk = self.factor_scores(reading)

        weighted = (
            self.weights["slope"] * slope_risk
            + self.weights["vibration"] * vibration_risk
            + self.weights["weather"] * weather_risk
        )
        probability = round_half_up(_clamp(weighted))

        assessment = RiskAssessment(
            probability=probability,
            level=classify_probability(probability),
            factors=RiskFactors(
                slope_instability=round_half_up(slope_risk),
                vibration_patterns=round_half_up(vibration_risk),
                weather_conditions=round_half_up(weather_risk),
            ),
        )
        logger.debug(f"Assessed {reading} -> {assessment.probability}% {assessment.level}")
        return assessment

    def assess_frame(self, readings: pd.DataFrame) -> pd.DataFrame:
        """
        Score a table of readings in one pass

        Args:
            readings: DataFrame with slope, vibration, rainfall and temperature columns

        Returns:
            Copy of the DataFrame with factor scores, probability and level added
        """
        missing = [field for field in READING_FIELDS if field not in readings.columns]
        if missing:
            raise InvalidInputError(missing[0], "missing column")

        scored = readings.copy()
        if scored.empty:
            for column in ("slope_instability", "vibration_patterns", "weather_conditions", "probability"):
                scored[column] = pd.Series(dtype="int64")
            scored["level"] = pd.Series(dtype="object")
            return scored

        values = {}
        for field in READING_FIELDS:
            column = scored[field]
            if column.dtype == bool or not pd.api.types.is_numeric_dtype(column):
                raise InvalidInputError(field, "expected numeric column")
            array = column.to_numpy(dtype=float)
            if not np.all(np.isfinite(array)):
                raise InvalidInputError(field, "must be finite")
            values[field] = array

        if np.any(values["slope"] < 0) or np.any(values["slope"] > config.MAX_SLOPE_DEG):
            raise InvalidInputError("slope", f"must be between 0 and {config.MAX_SLOPE_DEG:g} degrees")
        for field in ("vibration", "rainfall"):
            if np.any(values[field] < 0):
                raise InvalidInputError(field, "must not be negative")

        slope_risk = np.clip(values["slope"] / config.SLOPE_SCALE_DEG * 100, 0, 100)
        vibration_risk = np.clip(values["vibration"] / config.VIBRATION_SCALE * 100, 0, 100)
        weather_load = values["rainfall"] + np.abs(values["temperature"] - config.REFERENCE_TEMPERATURE_C)
        weather_risk = np.clip(weather_load / config.WEATHER_SCALE * 100, 0, 100)

        weighted = (
            self.weights["slope"] * slope_risk
            + self.weights["vibration"] * vibration_risk
            + self.weights["weather"] * weather_risk
        )
        probability = np.floor(np.clip(weighted, 0, 100) + 0.5).astype(int)

        scored["slope_instability"] = np.floor(slope_risk + 0.5).astype(int)
        scored["vibration_patterns"] = np.floor(vibration_risk + 0.5).astype(int)
        scored["weather_conditions"] = np.floor(weather_risk + 0.5).astype(int)
        scored["probability"] = probability

        conditions = [probability >= bound for bound, _ in config.RISK_BANDS]
        choices = [level for _, level in config.RISK_BANDS]
        scored["level"] = np.select(conditions, choices, default=config.RISK_BANDS[-1][1])

        logger.info(f"Scored {len(scored)} readings")
        return scored


_default_scorer = RiskScorer(config.FACTOR_WEIGHTS)


def assess_risk(reading: Union[Reading, Mapping[str, Any]]) -> RiskAssessment:
    """Assess a reading with the default factor weights"""
    return _default_scorer.assess(reading)


def summarize_assessments(assessments: Iterable[RiskAssessment], top: int = 5) -> Dict[str, Any]:
    """
    Aggregate many assessments into band counts, mean and the riskiest entries

    Returns:
        Dictionary with count, average_probability, risk_distribution and
        highest_risk (indices into the input, highest probability first)
    """
    assessments = list(assessments)
    distribution = {level: 0 for level in reversed(config.RISK_LEVELS)}
    for assessment in assessments:
        distribution[assessment.level] += 1

    if assessments:
        average = round(sum(a.probability for a in assessments) / len(assessments), 1)
    else:
        average = 0.0

    ranked: List[int] = sorted(
        range(len(assessments)),
        key=lambda i: assessments[i].probability,
        reverse=True,
    )[:top]

    return {
        "count": len(assessments),
        "average_probability": average,
        "risk_distribution": distribution,
        "highest_risk": ranked,
    }
