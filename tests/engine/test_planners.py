# tests/engine/test_planners.py
import pytest

from trailmap.domain.entities.geography import NO_COORD, NO_DISTANCE, NO_WAY, Coord
from trailmap.domain.ways import WayIndex
from trailmap.engine.planners import RoutePlanners, trim_ways
from trailmap.engine.search import RouteSearch

A, B, C, D = Coord(0, 0), Coord(10, 0), Coord(10, 10), Coord(0, 10)


@pytest.fixture
def detour() -> WayIndex:
    idx = WayIndex()
    # long direct way listed first, two short hops via (5, 0)
    idx.add_way("W1", [(0, 0), (0, 50), (10, 0)])
    idx.add_way("W2", [(0, 0), (5, 0)])
    idx.add_way("W3", [(5, 0), (10, 0)])
    return idx


def test_shortest_distance_prefers_cheaper_hops(detour: WayIndex):
    p = RoutePlanners(detour)
    assert p.route_shortest_distance(A, B) == [
        (A, NO_WAY, 0),
        (Coord(5, 0), "W2", 5),
        (B, "W3", 10),
    ]


def test_least_crossroads_prefers_fewer_ways(detour: WayIndex):
    p = RoutePlanners(detour)
    assert p.route_least_crossroads(A, B) == [(A, NO_WAY, 0), (B, "W1", 100)]


def test_planner_sentinels(detour: WayIndex):
    p = RoutePlanners(detour)
    sentinel = [(NO_COORD, NO_WAY, NO_DISTANCE)]
    assert p.route_shortest_distance(A, (99, 99)) == sentinel
    assert p.route_least_crossroads((99, 99), A) == sentinel
    assert p.route_shortest_distance(A, A) == [(A, NO_WAY, 0)]
    detour.add_way("far", [(100, 100), (200, 100)])
    assert p.route_shortest_distance(A, (200, 100)) == []
    assert p.route_least_crossroads(A, (200, 100)) == []


def test_shortest_is_never_longer_than_any(detour: WayIndex):
    any_route = RouteSearch(detour).route_any(A, B)
    best = RoutePlanners(detour).route_shortest_distance(A, B)
    assert best[-1][2] <= any_route[-1][2]


def test_trim_keeps_cheapest_spanning_ways():
    idx = WayIndex()
    idx.add_way("S1", [A, B])
    idx.add_way("S2", [B, C])
    idx.add_way("S3", [C, D])
    idx.add_way("S4", [D, A])
    idx.add_way("diag", [A, C])  # floor(14.14) = 14
    idx.add_way("loop", [B, (12, 3), B])
    assert trim_ways(idx) == 30
    assert sorted(idx.all_ways()) == ["S1", "S2", "S3"]
    s = RouteSearch(idx)
    for x in (B, C, D):
        assert s.route_any(A, x)
    assert s.route_with_cycle(A) == []


def test_trim_leaves_forest_alone():
    idx = WayIndex()
    idx.add_way("a", [A, B])
    idx.add_way("b", [(50, 50), (53, 54)])
    assert trim_ways(idx) == 15
    assert sorted(idx.all_ways()) == ["a", "b"]
    assert trim_ways(WayIndex()) == 0
