# domain/entities/geography.py
from __future__ import annotations

import math
from dataclasses import dataclass, field

WayId = str
Distance = int

# Return values for lookups that found nothing
NO_VALUE = -(2**31)
NO_DISTANCE: Distance = NO_VALUE
NO_WAY: WayId = "!!No way!!"


@dataclass(frozen=True)
class Coord:
    x: int = NO_VALUE
    y: int = NO_VALUE

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def order_key(self) -> tuple[float, int]:
        """Distance from the origin first, then y."""
        return (self.norm(), self.y)

    def __lt__(self, other: Coord) -> bool:
        return self.order_key() < other.order_key()

    def __iter__(self):
        yield self.x
        yield self.y


NO_COORD = Coord(NO_VALUE, NO_VALUE)

CoordLike = Coord | tuple[int, int]


def as_coord(c: CoordLike) -> Coord:
    return c if isinstance(c, Coord) else Coord(int(c[0]), int(c[1]))


def euclidean(a: Coord, b: Coord) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def polyline_length(coords: list[Coord]) -> Distance:
    # truncated per segment, not over the whole polyline
    return sum(math.floor(euclidean(a, b)) for a, b in zip(coords[:-1], coords[1:]))


@dataclass(frozen=True)
class Way:
    id: WayId
    coords: tuple[Coord, ...]
    length: Distance = field(init=False)

    def __post_init__(self):
        if len(self.coords) < 2:
            raise ValueError(f"way {self.id!r} needs at least two coordinates")
        object.__setattr__(self, "length", polyline_length(list(self.coords)))

    @classmethod
    def from_coords(cls, way_id: WayId, coords) -> Way:
        return cls(way_id, tuple(as_coord(c) for c in coords))

    @property
    def end1(self) -> Coord:
        return self.coords[0]

    @property
    def end2(self) -> Coord:
        return self.coords[-1]

    @property
    def is_loop(self) -> bool:
        return self.end1 == self.end2

    def other_end(self, c: Coord) -> Coord:
        return self.end2 if c == self.end1 else self.end1
