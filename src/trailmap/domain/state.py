# trailmap/domain/state.py
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from trailmap.domain.entities.geography import NO_DISTANCE, Coord, Distance


@dataclass
class CrossroadState:
    coord: Coord
    visited: bool = False
    distance: Distance = NO_DISTANCE

    @property
    def distance_known(self) -> bool:
        return self.distance != NO_DISTANCE

    def reset(self) -> None:
        self.visited = False
        self.distance = NO_DISTANCE


@dataclass
class CrossroadTable:
    """
    Search scratch space for every coordinate that ends at least one way.
    Entries follow the way index; queries only touch `visited`/`distance`.
    """

    entries: dict[Coord, CrossroadState] = field(default_factory=dict)
    in_query: bool = False

    def __contains__(self, c: Coord) -> bool:
        return c in self.entries

    def __getitem__(self, c: Coord) -> CrossroadState:
        return self.entries[c]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.entries)

    def get(self, c: Coord) -> CrossroadState | None:
        return self.entries.get(c)

    def ensure(self, c: Coord) -> CrossroadState:
        st = self.entries.get(c)
        if st is None:
            st = self.entries[c] = CrossroadState(c)
        return st

    def discard(self, c: Coord) -> None:
        self.entries.pop(c, None)

    def clear(self) -> None:
        self.entries.clear()

    def reset(self) -> None:
        for st in self.entries.values():
            st.reset()

    def visit(self, c: Coord, distance: Distance) -> None:
        st = self.entries[c]
        st.visited, st.distance = True, distance

    def is_visited(self, c: Coord) -> bool:
        return self.entries[c].visited

    def distance(self, c: Coord) -> Distance:
        return self.entries[c].distance

    @contextmanager
    def query(self):
        """Reset every entry and hold the table for one traversal."""
        if self.in_query:
            raise RuntimeError("a route query is already in progress")
        self.reset()
        self.in_query = True
        try:
            yield self
        finally:
            self.in_query = False
