"""
Synthetic risk-zone grid for the site map
"""

from dataclasses import asdict, dataclass, replace
from typing import Dict, List, Tuple

import numpy as np

GRID_ROWS = 5
GRID_COLS = 5
ZONE_WIDTH = 70
ZONE_HEIGHT = 50


@dataclass(frozen=True)
class RiskZone:
    id: str
    x: int
    y: int
    width: int
    height: int
    risk: str
    probability: int
    factors: Tuple[str, ...]

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["factors"] = list(self.factors)
        return data


def zone_band(probability: float) -> str:
    # Strict thresholds, unlike the assessment bands
    if probability > 75:
        return "High"
    if probability > 50:
        return "Medium"
    if probability > 25:
        return "Low"
    return "Safe"


def zone_factors(probability: float) -> Tuple[str, ...]:
    factors = []
    if probability > 60:
        factors.append("Slope Instability")
    if probability > 40:
        factors.append("Vibration")
    if probability > 30:
        factors.append("Weather")
    return tuple(factors)


def risk_zone_grid(rng: np.random.Generator) -> List[RiskZone]:
    """Lay out a 5x5 grid of zones with random probabilities"""
    zones = []
    for i, probability in enumerate(rng.random(GRID_ROWS * GRID_COLS) * 100):
        row, col = divmod(i, GRID_COLS)
        zones.append(RiskZone(
            id=f"zone-{i}",
            x=col * 80 + 10,
            y=row * 60 + 10,
            width=ZONE_WIDTH,
            height=ZONE_HEIGHT,
            risk=zone_band(probability),
            probability=int(np.floor(probability + 0.5)),
            factors=zone_factors(probability),
        ))
    return zones


def refresh_zones(zones: List[RiskZone], rng: np.random.Generator) -> List[RiskZone]:
    """Nudge each zone's probability by up to +/-10, keeping its band and factors"""
    jitter = (rng.random(len(zones)) - 0.5) * 20
    return [
        replace(zone, probability=int(np.floor(np.clip(zone.probability + delta, 0, 100) + 0.5)))
        for zone, delta in zip(zones, jitter)
    ]


def zone_counts(zones: List[RiskZone]) -> Dict[str, int]:
    counts = {"High": 0, "Medium": 0, "Low": 0, "Safe": 0}
    for zone in zones:
        counts[zone.risk] += 1
    return counts
