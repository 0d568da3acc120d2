"""
Synthetic rockfall probability forecast

Projects the current risk band forward as an hourly (24h) or daily (7d, 30d)
series of probabilities with a confidence figure and trend label.
"""

from datetime import datetime, timedelta
from typing import Dict, Optional
import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

TIME_RANGES = {
    "24h": (24, timedelta(hours=1), "%H:%M"),
    "7d": (7, timedelta(days=1), "%b %d"),
    "30d": (30, timedelta(days=1), "%b %d"),
}

BASE_RISK = {
    "High": 80,
    "Medium": 55,
    "Low": 35,
}
DEFAULT_BASE_RISK = 30


def probability_forecast(
    current_level: str,
    time_range: str,
    rng: np.random.Generator,
    start: Optional[datetime] = None
) -> pd.DataFrame:
    """
    Generate a probability forecast

    Args:
        current_level: Current risk band, sets the baseline probability
        time_range: One of "24h", "7d", "30d"
        rng: Random generator
        start: Timestamp of the first point, defaults to now

    Returns:
        DataFrame with time, timestamp, probability, confidence, trend and
        per-factor contributions (slope, weather, vibration, historical)
    """
    if time_range not in TIME_RANGES:
        raise ValueError(f"Unknown time range '{time_range}', expected one of {list(TIME_RANGES)}")

    points, step, label_format = TIME_RANGES[time_range]
    start = start or datetime.now()
    base_risk = BASE_RISK.get(current_level, DEFAULT_BASE_RISK)

    trend_draw = rng.random(points)
    variance = (rng.random(points) - 0.5) * 20
    drift = np.where(trend_draw > 0.6, 10, np.where(trend_draw < 0.4, -10, 0))
    probability = np.clip(base_risk + variance + drift, 0, 100)

    timestamps = [start + step * i for i in range(points)]

    forecast = pd.DataFrame({
        "time": [t.strftime(label_format) for t in timestamps],
        "timestamp": timestamps,
        "probability": np.floor(probability + 0.5).astype(int),
        "confidence": np.floor(85 + rng.random(points) * 10 + 0.5).astype(int),
        "trend": np.where(trend_draw > 0.6, "increasing", np.where(trend_draw < 0.4, "decreasing", "stable")),
        "slope": np.floor(20 + rng.random(points) * 40 + 0.5).astype(int),
        "weather": np.floor(15 + rng.random(points) * 35 + 0.5).astype(int),
        "vibration": np.floor(10 + rng.random(points) * 30 + 0.5).astype(int),
        "historical": np.floor(25 + rng.random(points) * 20 + 0.5).astype(int),
    })

    logger.info(f"Generated {time_range} forecast from {current_level} baseline ({base_risk}%)")
    return forecast


def forecast_summary(forecast: pd.DataFrame) -> Dict:
    """
    Headline figures for a forecast

    Returns:
        current_probability (first point), avg_confidence and trend_direction
    """
    if forecast.empty:
        return {"current_probability": 0, "avg_confidence": 0.0, "trend_direction": "decreasing"}

    increasing = int((forecast["trend"] == "increasing").sum())
    decreasing = int((forecast["trend"] == "decreasing").sum())

    return {
        "current_probability": int(forecast["probability"].iloc[0]),
        "avg_confidence": round(float(forecast["confidence"].mean()), 1),
        "trend_direction": "increasing" if increasing > decreasing else "decreasing",
    }
