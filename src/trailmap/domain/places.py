# trailmap/domain/places.py
import heapq

from trailmap.domain.entities.geography import NO_COORD, Coord, CoordLike, as_coord, euclidean
from trailmap.domain.entities.places import NO_NAME, Name, Place, PlaceId, PlaceType


class PlaceRegistry:
    def __init__(self):
        self._by_id: dict[PlaceId, Place] = {}
        self._by_name: dict[Name, set[PlaceId]] = {}
        self._by_type: dict[PlaceType, set[PlaceId]] = {}
        # cached listings, dropped on any change that affects their order
        self._alphabetical: list[PlaceId] | None = None
        self._coord_order: list[PlaceId] | None = None

    def __len__(self) -> int:
        return len(self._by_id)

    def place_count(self) -> int:
        return len(self._by_id)

    def all_places(self) -> list[PlaceId]:
        return list(self._by_id)

    def clear(self) -> None:
        self._by_id.clear()
        self._by_name.clear()
        self._by_type.clear()
        self._alphabetical = self._coord_order = None

    def add_place(self, pid: PlaceId, name: Name, ptype: PlaceType, xy: CoordLike) -> bool:
        if pid in self._by_id:
            return False
        self._by_id[pid] = Place(pid, name, ptype, as_coord(xy))
        self._by_name.setdefault(name, set()).add(pid)
        self._by_type.setdefault(ptype, set()).add(pid)
        self._alphabetical = self._coord_order = None
        return True

    def get_place_name_type(self, pid: PlaceId) -> tuple[Name, PlaceType]:
        p = self._by_id.get(pid)
        if p is None:
            return NO_NAME, PlaceType.NO_TYPE
        return p.name, p.type

    def get_place_coord(self, pid: PlaceId) -> Coord:
        p = self._by_id.get(pid)
        return p.coord if p else NO_COORD

    def places_alphabetically(self) -> list[PlaceId]:
        if self._alphabetical is None:
            self._alphabetical = sorted(self._by_id, key=lambda i: (self._by_id[i].name, i))
        return list(self._alphabetical)

    def places_coord_order(self) -> list[PlaceId]:
        if self._coord_order is None:
            self._coord_order = sorted(
                self._by_id, key=lambda i: (*self._by_id[i].coord.order_key(), i)
            )
        return list(self._coord_order)

    def find_places_name(self, name: Name) -> list[PlaceId]:
        return sorted(self._by_name.get(name, ()))

    def find_places_type(self, ptype: PlaceType) -> list[PlaceId]:
        return sorted(self._by_type.get(ptype, ()))

    def change_place_name(self, pid: PlaceId, newname: Name) -> bool:
        p = self._by_id.get(pid)
        if p is None:
            return False
        self._unindex(self._by_name, p.name, pid)
        p.name = newname
        self._by_name.setdefault(newname, set()).add(pid)
        self._alphabetical = None
        return True

    def change_place_coord(self, pid: PlaceId, newcoord: CoordLike) -> bool:
        p = self._by_id.get(pid)
        if p is None:
            return False
        p.coord = as_coord(newcoord)
        self._coord_order = None
        return True

    def remove_place(self, pid: PlaceId) -> bool:
        p = self._by_id.pop(pid, None)
        if p is None:
            return False
        self._unindex(self._by_name, p.name, pid)
        self._unindex(self._by_type, p.type, pid)
        self._alphabetical = self._coord_order = None
        return True

    def places_closest_to(self, xy: CoordLike, ptype: PlaceType, k: int = 3) -> list[PlaceId]:
        """Up to `k` places nearest to `xy`, ties going to the smaller y. NO_TYPE matches all."""
        c = as_coord(xy)
        if ptype == PlaceType.NO_TYPE:
            candidates = self._by_id.values()
        else:
            candidates = (self._by_id[i] for i in self._by_type.get(ptype, ()))
        best = heapq.nsmallest(
            k, candidates, key=lambda p: (euclidean(c, p.coord), p.coord.y, p.id)
        )
        return [p.id for p in best]

    @staticmethod
    def _unindex(index: dict, key, pid: PlaceId) -> None:
        ids = index[key]
        ids.discard(pid)
        if not ids:
            del index[key]
