# domain/entities/places.py
from dataclasses import dataclass, field
from enum import Enum

from trailmap.domain.entities.geography import Coord

PlaceId = int
AreaId = int
Name = str

NO_PLACE: PlaceId = -1
NO_AREA: AreaId = -1
NO_NAME: Name = "!!NO_NAME!!"


class PlaceType(Enum):
    OTHER = 0
    FIREPIT = 1
    SHELTER = 2
    PARKING = 3
    PEAK = 4
    BAY = 5
    AREA = 6
    NO_TYPE = 7


@dataclass
class Place:
    id: PlaceId
    name: Name
    type: PlaceType
    coord: Coord


@dataclass
class Area:
    id: AreaId
    name: Name
    coords: list[Coord]
    # arena slots, not ids
    parent: int | None = None
    children: list[int] = field(default_factory=list)
