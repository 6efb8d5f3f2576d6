# tests/domain/test_geography.py
import math

import pytest

from trailmap.domain.entities.geography import NO_COORD, NO_VALUE, Coord, Way, polyline_length


def test_length_truncates_each_segment():
    # diagonal steps are 1.414.. each; floor per step gives 3, not floor(4.24)=4
    w = Way.from_coords("d", [(0, 0), (1, 1), (2, 2), (3, 3)])
    assert w.length == 3
    assert w.length == sum(math.floor(math.hypot(1, 1)) for _ in range(3))


def test_length_of_pythagorean_segments():
    assert Way.from_coords("a", [(0, 0), (3, 4)]).length == 5
    assert polyline_length([Coord(0, 0), Coord(0, 3), Coord(4, 3)]) == 7


def test_endpoints_are_first_and_last():
    w = Way.from_coords("w", [(0, 0), (5, 5), (9, 1)])
    assert w.end1 == Coord(0, 0) and w.end2 == Coord(9, 1)
    assert w.other_end(Coord(0, 0)) == Coord(9, 1)
    assert w.other_end(Coord(9, 1)) == Coord(0, 0)
    assert not w.is_loop


def test_way_needs_two_coordinates():
    with pytest.raises(ValueError):
        Way.from_coords("x", [(1, 1)])


def test_coord_order_by_distance_then_y():
    pts = [Coord(3, 4), Coord(0, 1), Coord(4, 3), Coord(-1, 0)]
    assert sorted(pts) == [Coord(-1, 0), Coord(0, 1), Coord(4, 3), Coord(3, 4)]


def test_sentinel_coord():
    assert NO_COORD == Coord(NO_VALUE, NO_VALUE)
    assert NO_COORD != Coord(0, 0)
    x, y = Coord(2, 7)
    assert (x, y) == (2, 7)
