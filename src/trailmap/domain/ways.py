# trailmap/domain/ways.py
from trailmap.domain.entities.geography import (
    NO_COORD,
    NO_WAY,
    Coord,
    CoordLike,
    Distance,
    Way,
    WayId,
    as_coord,
)
from trailmap.domain.state import CrossroadTable
from trailmap.engine.hooks import EngineHooks, NoopHooks


class WayIndex:
    """
    Ways by id, plus the ids incident to each endpoint coordinate.

    Incidence lists keep insertion order, which fixes neighbor order for the
    depth-first searches. A self-loop is listed twice under its coordinate.
    """

    def __init__(self, hooks: EngineHooks | None = None):
        self._by_id: dict[WayId, Way] = {}
        self._by_coord: dict[Coord, list[WayId]] = {}
        self.crossroads = CrossroadTable()
        self._hooks = hooks or NoopHooks()

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, way_id: WayId) -> bool:
        return way_id in self._by_id

    def _check_idle(self, op: str) -> None:
        if self.crossroads.in_query:
            self._hooks.error(op, reason="mutation_during_query")
            raise RuntimeError(f"{op} called while a route query is in progress")

    # ---------------- mutation --------------------

    def add_way(self, way_id: WayId, coords) -> bool:
        self._check_idle("add_way")
        pts = [as_coord(c) for c in coords]
        if way_id in self._by_id or way_id == NO_WAY or len(pts) < 2:
            self._hooks.mutation("add_way", way_id=way_id, ok=False, ways=len(self._by_id))
            return False
        way = Way(way_id, tuple(pts))
        self._by_id[way_id] = way
        for end in (way.end1, way.end2):
            self._by_coord.setdefault(end, []).append(way_id)
            self.crossroads.ensure(end)
        self._hooks.mutation("add_way", way_id=way_id, ok=True, ways=len(self._by_id))
        return True

    def remove_way(self, way_id: WayId) -> bool:
        self._check_idle("remove_way")
        way = self._by_id.pop(way_id, None)
        if way is None:
            self._hooks.mutation("remove_way", way_id=way_id, ok=False, ways=len(self._by_id))
            return False
        for end in (way.end1, way.end2):
            incident = self._by_coord[end]
            incident.remove(way_id)  # one entry per endpoint
            if not incident:
                del self._by_coord[end]
                self.crossroads.discard(end)
        self._hooks.mutation("remove_way", way_id=way_id, ok=True, ways=len(self._by_id))
        return True

    def clear(self) -> None:
        self._check_idle("clear_ways")
        self._by_id.clear()
        self._by_coord.clear()
        self.crossroads.clear()
        self._hooks.mutation("clear_ways", way_id=None, ok=True, ways=0)

    # ---------------- lookup --------------------

    def get_way(self, way_id: WayId) -> Way | None:
        return self._by_id.get(way_id)

    def way_length(self, way_id: WayId) -> Distance:
        return self._by_id[way_id].length

    def all_ways(self) -> list[WayId]:
        return list(self._by_id)

    def ways(self) -> list[Way]:
        return list(self._by_id.values())

    def get_way_coords(self, way_id: WayId) -> list[Coord]:
        way = self._by_id.get(way_id)
        if way is None:
            return [NO_COORD]
        return list(way.coords)

    def degree(self, xy: CoordLike) -> int:
        return len(self._by_coord.get(as_coord(xy), ()))

    def ways_from(self, xy: CoordLike) -> list[tuple[WayId, Coord]]:
        c = as_coord(xy)
        out = []
        for wid in self._by_coord.get(c, ()):
            out.append((wid, self._by_id[wid].other_end(c)))
        return out

    def crossroads_count(self) -> int:
        return len(self._by_coord)
