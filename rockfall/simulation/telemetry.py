"""
Synthetic sensor telemetry

Generates readings for a selected mine or a free-text location, and the
24-hour monitoring trend shown alongside the risk breakdown. All randomness
comes from an injected numpy Generator.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Optional
import logging

import numpy as np
import pandas as pd

from .. import config
from ..mines import Mine
from ..risk_scoring import Reading, RiskScorer

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the generator every simulation function draws from"""
    if seed is None:
        seed = config.DEFAULT_SEED
    return np.random.default_rng(seed)


@dataclass(frozen=True)
class LocationData:
    name: str
    elevation: float
    slope: float
    rainfall: float
    temperature: float
    vibration: float

    @property
    def reading(self) -> Reading:
        return Reading(
            slope=self.slope,
            vibration=self.vibration,
            rainfall=self.rainfall,
            temperature=self.temperature,
        )

    def to_dict(self) -> Dict:
        return asdict(self)


def simulate_mine_reading(mine: Mine, rng: np.random.Generator) -> LocationData:
    """
    Simulate current conditions at a catalogued mine

    Ranges: slope 5-50 deg, rainfall 5-25 mm/h, temperature 20-35 C,
    vibration 2-12 Hz.
    """
    location = LocationData(
        name=mine.name,
        elevation=mine.elevation,
        slope=float(rng.uniform(5, 50)),
        rainfall=float(rng.uniform(5, 25)),
        temperature=float(rng.uniform(20, 35)),
        vibration=float(rng.uniform(2, 12)),
    )
    logger.info(f"Simulated reading for {mine.name}: slope={location.slope:.1f} deg")
    return location


def simulate_location_reading(name: str, rng: np.random.Generator) -> LocationData:
    """
    Simulate conditions for an arbitrary named location

    Integer ranges: elevation 500-1499 m, slope 15-54 deg, rainfall 10-59 mm,
    temperature 15-34 C, vibration 20-119 units.
    """
    return LocationData(
        name=name,
        elevation=int(rng.integers(500, 1500)),
        slope=int(rng.integers(15, 55)),
        rainfall=int(rng.integers(10, 60)),
        temperature=int(rng.integers(15, 35)),
        vibration=int(rng.integers(20, 120)),
    )


def monitoring_trends(
    location: LocationData,
    rng: np.random.Generator,
    hours: int = 24,
    scorer: Optional[RiskScorer] = None
) -> pd.DataFrame:
    """
    Hourly readings scattered around the current conditions

    Args:
        location: Current conditions
        rng: Random generator
        hours: Number of hourly samples
        scorer: Scorer used for the probability column

    Returns:
        DataFrame with hour, slope, vibration, rainfall, temperature and the
        scored probability and level for each hour
    """
    trends = pd.DataFrame({
        "hour": [f"{h % 24:02d}:00" for h in range(hours)],
        "vibration": np.maximum(0, location.vibration + (rng.random(hours) - 0.5) * 20),
        "slope": np.clip(location.slope + (rng.random(hours) - 0.5) * 5, 0, config.MAX_SLOPE_DEG),
        "rainfall": np.maximum(0, location.rainfall + (rng.random(hours) - 0.5) * 10),
        "temperature": np.full(hours, float(location.temperature)),
    })

    scorer = scorer or RiskScorer(config.FACTOR_WEIGHTS)
    scored = scorer.assess_frame(trends)
    return scored[["hour", "slope", "vibration", "rainfall", "temperature", "probability", "level"]]
