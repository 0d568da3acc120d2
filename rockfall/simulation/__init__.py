"""
Simulation Module

Seeded generators for synthetic mine telemetry:
- Telemetry: sensor readings and 24-hour monitoring trends
- Elevation: digital elevation profile
- Forecast: probability forecast
- Risk zones: site map grid
- Data sources: monitoring feed panel
"""

from .telemetry import (
    LocationData,
    make_rng,
    monitoring_trends,
    simulate_location_reading,
    simulate_mine_reading,
)
from .elevation import elevation_profile, profile_summary
from .forecast import TIME_RANGES, forecast_summary, probability_forecast
from .risk_zones import RiskZone, refresh_zones, risk_zone_grid, zone_counts
from .data_sources import DataSource, data_source_summary, default_data_sources, tick_data_sources

__all__ = [
    "LocationData",
    "make_rng",
    "monitoring_trends",
    "simulate_location_reading",
    "simulate_mine_reading",
    "elevation_profile",
    "profile_summary",
    "TIME_RANGES",
    "forecast_summary",
    "probability_forecast",
    "RiskZone",
    "refresh_zones",
    "risk_zone_grid",
    "zone_counts",
    "DataSource",
    "data_source_summary",
    "default_data_sources",
    "tick_data_sources",
]
