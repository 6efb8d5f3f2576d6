# engine/planners.py
import heapq
import time
from collections import deque

from trailmap.domain.entities.geography import Coord, CoordLike, Distance, as_coord
from trailmap.domain.ways import WayIndex
from trailmap.engine.hooks import EngineHooks, NoopHooks
from trailmap.engine.search import (
    NO_ROUTE,
    Parents,
    RouteStep,
    ms_since,
    walk_back,
    with_distances,
)


class RoutePlanners:
    """Shortest-distance and fewest-crossroads routes over the same way index."""

    def __init__(self, ways: WayIndex, hooks: EngineHooks | None = None):
        self.ways = ways
        self._hooks = hooks or NoopHooks()

    def _run(self, kind: str, fromxy: CoordLike, toxy: CoordLike, search) -> list[RouteStep]:
        src, dst = as_coord(fromxy), as_coord(toxy)
        if not self.ways.degree(src) or not self.ways.degree(dst):
            return list(NO_ROUTE)
        t0 = time.perf_counter()
        table = self.ways.crossroads
        self._hooks.query_start(kind, src=src, dst=dst, crossroads=len(table))
        with table.query():
            parents: Parents = {}
            found = search(src, dst, parents)
            route = with_distances(table, walk_back(parents, dst)) if found else []
        self._hooks.query_end(kind, found=found, hops=max(len(route) - 1, 0), ms=ms_since(t0))
        return route

    def route_shortest_distance(self, fromxy: CoordLike, toxy: CoordLike) -> list[RouteStep]:
        return self._run("route_shortest_distance", fromxy, toxy, self._dijkstra)

    def route_least_crossroads(self, fromxy: CoordLike, toxy: CoordLike) -> list[RouteStep]:
        return self._run("route_least_crossroads", fromxy, toxy, self._bfs)

    def _dijkstra(self, src: Coord, dst: Coord, parents: Parents) -> bool:
        # `distance` is the best known so far; `visited` means settled
        table = self.ways.crossroads
        table[src].distance = 0
        seq = 0
        heap: list[tuple[Distance, int, Coord]] = [(0, seq, src)]
        while heap:
            d, _, cur = heapq.heappop(heap)
            st = table[cur]
            if st.visited:
                continue
            st.visited = True
            if cur == dst:
                return True
            for wid, nxt in self.ways.ways_from(cur):
                nst = table[nxt]
                if nst.visited:
                    continue
                nd = d + self.ways.way_length(wid)
                if not nst.distance_known or nd < nst.distance:
                    nst.distance = nd
                    parents[nxt] = (cur, wid)
                    seq += 1
                    heapq.heappush(heap, (nd, seq, nxt))
        return False

    def _bfs(self, src: Coord, dst: Coord, parents: Parents) -> bool:
        table = self.ways.crossroads
        table.visit(src, 0)
        q = deque([src])
        while q:
            cur = q.popleft()
            if cur == dst:
                return True
            for wid, nxt in self.ways.ways_from(cur):
                if table.is_visited(nxt):
                    continue
                table.visit(nxt, table.distance(cur) + self.ways.way_length(wid))
                parents[nxt] = (cur, wid)
                q.append(nxt)
        return False


def trim_ways(ways: WayIndex) -> Distance:
    """
    Drop every way not needed to keep connected crossroads connected, keeping
    the cheapest such set (Kruskal, ties by way id). Returns the total length
    of the ways left.
    """
    root: dict[Coord, Coord] = {}

    def find(c: Coord) -> Coord:
        root.setdefault(c, c)
        while root[c] != c:
            root[c] = root[root[c]]
            c = root[c]
        return c

    redundant = []
    for way in sorted(ways.ways(), key=lambda w: (w.length, w.id)):
        a, b = find(way.end1), find(way.end2)
        if a == b:
            redundant.append(way.id)
        else:
            root[a] = b
    for wid in redundant:
        ways.remove_way(wid)
    return sum(w.length for w in ways.ways())
