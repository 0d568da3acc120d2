"""
Synthetic digital elevation profile along a 1 km transect
"""

import numpy as np
import pandas as pd

VIEW_MODES = ("elevation", "slope", "stability")


def _round(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5).astype(int)


def elevation_profile(rng: np.random.Generator, points: int = 50, spacing_m: int = 20) -> pd.DataFrame:
    """
    Generate an elevation profile with slope, stability and risk per point

    Returns:
        DataFrame with distance, elevation, slope, stability and risk_level
    """
    i = np.arange(points)

    baseline = 300 + np.sin(i * 0.1) * 50 + np.cos(i * 0.05) * 30
    elevation = np.maximum(0, baseline + (rng.random(points) - 0.5) * 40)

    # Slope against the previous point's trend line, flat at the origin
    previous_trend = 300 + np.sin((i - 1) * 0.1) * 50
    slope = np.where(i > 0, np.abs(elevation - previous_trend), 0.0)

    stability = np.maximum(0, 100 - slope * 2 - rng.random(points) * 20)

    risk_level = np.select(
        [(slope > 25) | (stability < 40), (slope > 15) | (stability < 60)],
        ["High", "Medium"],
        default="Low",
    )

    return pd.DataFrame({
        "distance": i * spacing_m,
        "elevation": _round(elevation),
        "slope": _round(slope),
        "stability": _round(stability),
        "risk_level": risk_level,
    })


def profile_summary(profile: pd.DataFrame) -> dict:
    """Peak elevation, steepest slope, mean stability and high-risk point count"""
    if profile.empty:
        return {"max_elevation": 0, "max_slope": 0, "avg_stability": 0.0, "high_risk_points": 0}

    return {
        "max_elevation": int(profile["elevation"].max()),
        "max_slope": int(profile["slope"].max()),
        "avg_stability": round(float(profile["stability"].mean()), 1),
        "high_risk_points": int((profile["risk_level"] == "High").sum()),
    }
