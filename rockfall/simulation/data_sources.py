"""
Monitoring data-source panel

The eight feeds the site is instrumented with, their health, and a simulated
refresh that drifts the values of online feeds.
"""

from dataclasses import asdict, dataclass, replace
from typing import Dict, List

import numpy as np

SOURCE_TYPES = ("sensor", "imagery", "environmental")
SOURCE_STATUSES = ("online", "offline", "error")


@dataclass(frozen=True)
class DataSource:
    id: str
    name: str
    type: str
    status: str
    last_update: str
    value: float
    unit: str
    threshold: float
    is_recording: bool

    @property
    def load(self) -> float:
        """Value as a percentage of threshold, capped at 100"""
        if self.threshold == 0:
            return 0.0
        return min(self.value / self.threshold * 100, 100.0)

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["load"] = round(self.load, 1)
        return data


def default_data_sources() -> List[DataSource]:
    return [
        DataSource("dem", "Digital Elevation Model", "imagery", "online", "2 min ago", 98, "%", 95, True),
        DataSource("drone", "Drone Imagery", "imagery", "online", "5 min ago", 1024, "images", 1000, True),
        DataSource("displacement", "Displacement Sensors", "sensor", "online", "1 min ago", 2.3, "mm", 5.0, True),
        DataSource("strain", "Strain Gauges", "sensor", "online", "1 min ago", 67, "με", 100, True),
        DataSource("pore_pressure", "Pore Pressure", "sensor", "error", "15 min ago", 45.2, "kPa", 50.0, False),
        DataSource("rainfall", "Rainfall Monitor", "environmental", "online", "30 sec ago", 12.5, "mm/h", 20.0, True),
        DataSource("temperature", "Temperature", "environmental", "online", "30 sec ago", 28.7, "°C", 35.0, True),
        DataSource("vibration", "Vibration Sensors", "environmental", "online", "10 sec ago", 8.2, "Hz", 15.0, True),
    ]


def tick_data_sources(sources: List[DataSource], rng: np.random.Generator) -> List[DataSource]:
    """Drift online values by up to +/-5% and stamp them as just updated"""
    drift = rng.random(len(sources)) - 0.5
    updated = []
    for source, d in zip(sources, drift):
        if source.status == "online":
            source = replace(source, value=float(source.value + d * source.value * 0.1), last_update="Just now")
        updated.append(source)
    return updated


def data_source_summary(sources: List[DataSource]) -> Dict:
    return {
        "total": len(sources),
        "online": sum(1 for s in sources if s.status == "online"),
        "error": sum(1 for s in sources if s.status == "error"),
        "recording": sum(1 for s in sources if s.is_recording),
        "total_value": int(np.floor(sum(s.value for s in sources) + 0.5)),
    }
