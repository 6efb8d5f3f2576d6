# gen/random_map.py
from dataclasses import dataclass

from trailmap.config.models import GeneratorModel
from trailmap.domain.areas import AreaRegistry
from trailmap.domain.entities.geography import Coord
from trailmap.domain.entities.places import PlaceType
from trailmap.domain.places import PlaceRegistry
from trailmap.domain.ways import WayIndex
from trailmap.gen.rng import MapStreams

_PLACE_TYPES = [t for t in PlaceType if t is not PlaceType.NO_TYPE]
_NAMES = ["Laavu", "Kota", "Huippu", "Lahti", "Parkki", "Niemi", "Kallio", "Suo"]


@dataclass
class MapSummary:
    places: int = 0
    areas: int = 0
    linked_areas: int = 0
    crossroads: int = 0
    ways: int = 0


class RandomMap:
    def __init__(self, cfg: GeneratorModel, streams: MapStreams):
        self.cfg, self.streams = cfg, streams

    def _point(self, rng) -> Coord:
        x0, y0, x1, y1 = self.cfg.extent
        return Coord(int(rng.integers(x0, x1 + 1)), int(rng.integers(y0, y1 + 1)))

    def fill_places(self, places: PlaceRegistry) -> int:
        rng = self.streams.stream("places")
        added = 0
        for pid in range(1, self.cfg.places + 1):
            ptype = _PLACE_TYPES[int(rng.integers(0, len(_PLACE_TYPES)))]
            name = f"{_NAMES[int(rng.integers(0, len(_NAMES)))]} {pid}"
            added += places.add_place(pid, name, ptype, self._point(rng))
        return added

    def fill_areas(self, areas: AreaRegistry) -> tuple[int, int]:
        rng = self.streams.stream("areas")
        added = linked = 0
        for aid in range(1, self.cfg.areas + 1):
            a, b = self._point(rng), self._point(rng)
            outline = [a, Coord(b.x, a.y), b, Coord(a.x, b.y)]
            added += areas.add_area(aid, f"Area {aid}", outline)
            # only link to earlier areas so the result stays a forest
            if aid > 1 and rng.random() < 0.7:
                linked += areas.add_subarea_to_area(aid, int(rng.integers(1, aid)))
        return added, linked

    def crossroads(self) -> list[Coord]:
        rng = self.streams.stream("crossroads")
        x0, y0, x1, y1 = self.cfg.extent
        want = min(self.cfg.crossroads, (x1 - x0 + 1) * (y1 - y0 + 1))
        seen: dict[Coord, None] = {}
        while len(seen) < want:
            seen.setdefault(self._point(rng), None)
        return list(seen)

    def fill_ways(self, ways: WayIndex) -> tuple[int, int]:
        nodes = self.crossroads()
        if self.cfg.ways == 0 or len(nodes) < 2:
            return len(nodes), 0
        rng = self.streams.stream("ways")
        added = 0
        for k in range(1, self.cfg.ways + 1):
            i, j = rng.choice(len(nodes), size=2, replace=False)
            bends = [self._point(rng) for _ in range(int(rng.integers(0, self.cfg.bends_max + 1)))]
            added += ways.add_way(f"W{k}", [nodes[int(i)], *bends, nodes[int(j)]])
        return len(nodes), added


def populate(
    cfg: GeneratorModel,
    *,
    streams: MapStreams,
    places: PlaceRegistry | None = None,
    areas: AreaRegistry | None = None,
    ways: WayIndex | None = None,
) -> MapSummary:
    gen = RandomMap(cfg, streams)
    out = MapSummary()
    if places is not None:
        out.places = gen.fill_places(places)
    if areas is not None:
        out.areas, out.linked_areas = gen.fill_areas(areas)
    if ways is not None:
        out.crossroads, out.ways = gen.fill_ways(ways)
    return out
