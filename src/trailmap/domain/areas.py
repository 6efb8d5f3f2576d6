# trailmap/domain/areas.py
from trailmap.domain.entities.geography import NO_COORD, Coord, CoordLike, as_coord
from trailmap.domain.entities.places import NO_AREA, NO_NAME, Area, AreaId, Name


class AreaRegistry:
    """
    Area tree kept in a flat arena. Areas link to each other by arena slot;
    `_slot` maps public ids to slots. Areas are never removed one by one, so
    slots stay valid until `clear()`.
    """

    def __init__(self):
        self._arena: list[Area] = []
        self._slot: dict[AreaId, int] = {}

    def __len__(self) -> int:
        return len(self._arena)

    def clear(self) -> None:
        self._arena.clear()
        self._slot.clear()

    def _get(self, aid: AreaId) -> Area | None:
        i = self._slot.get(aid)
        return None if i is None else self._arena[i]

    def add_area(self, aid: AreaId, name: Name, coords) -> bool:
        if aid in self._slot:
            return False
        self._slot[aid] = len(self._arena)
        self._arena.append(Area(aid, name, [as_coord(c) for c in coords]))
        return True

    def get_area_name(self, aid: AreaId) -> Name:
        a = self._get(aid)
        return a.name if a else NO_NAME

    def get_area_coords(self, aid: AreaId) -> list[Coord]:
        a = self._get(aid)
        return list(a.coords) if a else [NO_COORD]

    def all_areas(self) -> list[AreaId]:
        return list(self._slot)

    def add_subarea_to_area(self, aid: AreaId, parentid: AreaId) -> bool:
        child_i, parent_i = self._slot.get(aid), self._slot.get(parentid)
        if child_i is None or parent_i is None:
            return False
        child = self._arena[child_i]
        if child.parent is not None:
            return False
        # the new parent must not already sit below the child
        if child_i == parent_i or child_i in self._ancestor_slots(parent_i):
            return False
        child.parent = parent_i
        self._arena[parent_i].children.append(child_i)
        return True

    def _ancestor_slots(self, i: int) -> list[int]:
        out = []
        p = self._arena[i].parent
        while p is not None:
            out.append(p)
            p = self._arena[p].parent
        return out

    def subarea_in_areas(self, aid: AreaId) -> list[AreaId]:
        i = self._slot.get(aid)
        if i is None:
            return [NO_AREA]
        return [self._arena[p].id for p in self._ancestor_slots(i)]

    def all_subareas_in_area(self, aid: AreaId) -> list[AreaId]:
        i = self._slot.get(aid)
        if i is None:
            return [NO_AREA]
        out: list[AreaId] = []
        stack = list(reversed(self._arena[i].children))
        while stack:
            j = stack.pop()
            out.append(self._arena[j].id)
            stack.extend(reversed(self._arena[j].children))
        return out

    def common_area_of_subareas(self, id1: AreaId, id2: AreaId) -> AreaId:
        i, j = self._slot.get(id1), self._slot.get(id2)
        if i is None or j is None:
            return NO_AREA
        # compare ancestor chains from the root down
        chain1 = self._ancestor_slots(i)[::-1]
        chain2 = self._ancestor_slots(j)[::-1]
        common = NO_AREA
        for a, b in zip(chain1, chain2):
            if a != b:
                break
            common = self._arena[a].id
        return common
