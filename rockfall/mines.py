"""
Mine catalogue and search
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

from .exceptions import UnknownMineError

MINE_STATUSES = ("Active", "Inactive", "Under Construction")


@dataclass(frozen=True)
class Mine:
    id: str
    name: str
    location: str
    type: str
    status: str
    latitude: float
    longitude: float
    elevation: int  # metres
    area: float  # hectares

    def to_dict(self) -> Dict:
        return asdict(self)


MINES: List[Mine] = [
    Mine(
        id="1",
        name="Karunya Open Pit Mine",
        location="Tamil Nadu, India",
        type="Iron Ore",
        status="Active",
        latitude=10.9347,
        longitude=76.9358,
        elevation=320,
        area=145.2,
    ),
    Mine(
        id="2",
        name="Salem Steel Plant Mine",
        location="Salem, Tamil Nadu",
        type="Iron Ore",
        status="Active",
        latitude=11.6643,
        longitude=78.1460,
        elevation=278,
        area=89.7,
    ),
    Mine(
        id="3",
        name="Kudankulam Limestone Mine",
        location="Tirunelveli, Tamil Nadu",
        type="Limestone",
        status="Active",
        latitude=8.1644,
        longitude=77.7066,
        elevation=45,
        area=203.4,
    ),
    Mine(
        id="4",
        name="Hosur Granite Quarry",
        location="Krishnagiri, Tamil Nadu",
        type="Granite",
        status="Under Construction",
        latitude=12.7368,
        longitude=77.8285,
        elevation=915,
        area=67.8,
    ),
]


def search_mines(term: Optional[str] = None, mines: Optional[List[Mine]] = None) -> List[Mine]:
    """Case-insensitive match on name, location or type. Empty term returns all."""
    mines = MINES if mines is None else mines
    if not term:
        return list(mines)

    needle = term.strip().lower()
    return [
        mine for mine in mines
        if needle in mine.name.lower()
        or needle in mine.location.lower()
        or needle in mine.type.lower()
    ]


def get_mine(mine_id: str) -> Mine:
    for mine in MINES:
        if mine.id == mine_id:
            return mine
    raise UnknownMineError(mine_id)
