# engine/search.py
"""
Depth-first route queries over the way graph.

Both searches walk an explicit stack of (coordinate, neighbor iterator) frames
so that exploration order matches a recursive DFS over `WayIndex.ways_from`
without touching the interpreter's recursion limit. Each reached coordinate
gets a parent pointer (predecessor, way used); routes are rebuilt by walking
those pointers back from the last coordinate and reversing.
"""

from __future__ import annotations

import time
from collections.abc import Iterator

from trailmap.domain.entities.geography import (
    NO_COORD,
    NO_DISTANCE,
    NO_WAY,
    Coord,
    CoordLike,
    Distance,
    WayId,
    as_coord,
)
from trailmap.domain.state import CrossroadTable
from trailmap.domain.ways import WayIndex
from trailmap.engine.hooks import EngineHooks, NoopHooks

RouteStep = tuple[Coord, WayId, Distance]
CycleStep = tuple[Coord, WayId]

NO_ROUTE: list[RouteStep] = [(NO_COORD, NO_WAY, NO_DISTANCE)]
NO_CYCLE: list[CycleStep] = [(NO_COORD, NO_WAY)]

Parents = dict[Coord, tuple[Coord, WayId]]


def walk_back(parents: Parents, last: Coord) -> list[tuple[Coord, WayId]]:
    """
    Return [(c0, NO_WAY), (c1, w1), ..., (last, wk)] where wi is the way that
    led from c(i-1) to ci.
    """
    steps: list[tuple[Coord, WayId]] = []
    node = last
    while node in parents:
        prev, wid = parents[node]
        steps.append((node, wid))
        node = prev
    steps.append((node, NO_WAY))
    steps.reverse()
    return steps


def with_distances(table: CrossroadTable, steps: list[tuple[Coord, WayId]]) -> list[RouteStep]:
    return [(c, w, table.distance(c)) for c, w in steps]


class RouteSearch:
    def __init__(self, ways: WayIndex, hooks: EngineHooks | None = None):
        self.ways = ways
        self._hooks = hooks or NoopHooks()

    def _frame(self, c: Coord) -> Iterator[tuple[WayId, Coord]]:
        return iter(self.ways.ways_from(c))

    # ------------------- any path ---------------------------

    def route_any(self, fromxy: CoordLike, toxy: CoordLike) -> list[RouteStep]:
        src, dst = as_coord(fromxy), as_coord(toxy)
        if not self.ways.degree(src) or not self.ways.degree(dst):
            return list(NO_ROUTE)

        t0 = time.perf_counter()
        table = self.ways.crossroads
        self._hooks.query_start("route_any", src=src, dst=dst, crossroads=len(table))
        with table.query():
            parents: Parents = {}
            found = self._dfs_to(src, dst, parents)
            route = with_distances(table, walk_back(parents, dst)) if found else []
        self._hooks.query_end(
            "route_any", found=found, hops=max(len(route) - 1, 0), ms=ms_since(t0)
        )
        return route

    def _dfs_to(self, src: Coord, dst: Coord, parents: Parents) -> bool:
        table = self.ways.crossroads
        table.visit(src, 0)
        stack = [(src, self._frame(src))]
        while stack:
            cur, neighbors = stack[-1]
            if cur == dst:
                return True
            for wid, nxt in neighbors:
                if table.is_visited(nxt):
                    continue
                table.visit(nxt, table.distance(cur) + self.ways.way_length(wid))
                parents[nxt] = (cur, wid)
                stack.append((nxt, self._frame(nxt)))
                break
            else:
                stack.pop()
        return False

    # ------------------- cycle ---------------------------

    def route_with_cycle(self, fromxy: CoordLike) -> list[CycleStep]:
        src = as_coord(fromxy)
        if not self.ways.degree(src):
            return list(NO_CYCLE)

        t0 = time.perf_counter()
        table = self.ways.crossroads
        self._hooks.query_start("route_with_cycle", src=src, dst=None, crossroads=len(table))
        with table.query():
            route = self._dfs_cycle(src)
        self._hooks.query_end(
            "route_with_cycle", found=bool(route), hops=max(len(route) - 1, 0), ms=ms_since(t0)
        )
        return route

    def _dfs_cycle(self, src: Coord) -> list[CycleStep]:
        table = self.ways.crossroads
        parents: Parents = {}
        table.visit(src, 0)
        # frame: (coordinate, way used to arrive, neighbor iterator)
        stack: list[tuple[Coord, WayId, Iterator[tuple[WayId, Coord]]]] = [
            (src, NO_WAY, self._frame(src))
        ]
        while stack:
            cur, arrived_by, neighbors = stack[-1]
            for wid, nxt in neighbors:
                if wid == arrived_by:
                    continue
                if table.is_visited(nxt):
                    return _cycle_steps(walk_back(parents, cur), wid, nxt)
                table.visit(nxt, table.distance(cur) + self.ways.way_length(wid))
                parents[nxt] = (cur, wid)
                stack.append((nxt, wid, self._frame(nxt)))
                break
            else:
                stack.pop()
        return []


def _cycle_steps(arrivals: list[tuple[Coord, WayId]], closing: WayId, repeat: Coord):
    # shift ways so each coordinate carries the way used to leave it
    coords = [c for c, _ in arrivals]
    leaving = [w for _, w in arrivals[1:]] + [closing]
    return list(zip(coords, leaving)) + [(repeat, NO_WAY)]


def ms_since(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000
