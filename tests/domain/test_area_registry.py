# tests/domain/test_area_registry.py
import pytest

from trailmap.domain.areas import AreaRegistry
from trailmap.domain.entities.geography import NO_COORD, Coord
from trailmap.domain.entities.places import NO_AREA, NO_NAME

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


@pytest.fixture
def tree() -> AreaRegistry:
    #      1
    #     / \
    #    2   3
    #    |
    #    4
    #    |
    #    5
    reg = AreaRegistry()
    for aid in range(1, 7):
        assert reg.add_area(aid, f"Area {aid}", SQUARE)
    assert reg.add_subarea_to_area(2, 1)
    assert reg.add_subarea_to_area(3, 1)
    assert reg.add_subarea_to_area(4, 2)
    assert reg.add_subarea_to_area(5, 4)
    return reg


def test_area_lookup(tree: AreaRegistry):
    assert tree.get_area_name(3) == "Area 3"
    assert tree.get_area_coords(1) == [Coord(*p) for p in SQUARE]
    assert sorted(tree.all_areas()) == [1, 2, 3, 4, 5, 6]
    assert tree.add_area(1, "dup", []) is False


def test_missing_area_sentinels(tree: AreaRegistry):
    assert tree.get_area_name(42) == NO_NAME
    assert tree.get_area_coords(42) == [NO_COORD]
    assert tree.subarea_in_areas(42) == [NO_AREA]
    assert tree.all_subareas_in_area(42) == [NO_AREA]
    assert tree.common_area_of_subareas(1, 42) == NO_AREA
    assert tree.add_subarea_to_area(42, 1) is False


def test_parent_chain_nearest_first(tree: AreaRegistry):
    assert tree.subarea_in_areas(5) == [4, 2, 1]
    assert tree.subarea_in_areas(1) == []


def test_all_subareas_preorder(tree: AreaRegistry):
    assert tree.all_subareas_in_area(1) == [2, 4, 5, 3]
    assert tree.all_subareas_in_area(4) == [5]
    assert tree.all_subareas_in_area(6) == []


def test_only_one_parent_and_no_loops(tree: AreaRegistry):
    assert tree.add_subarea_to_area(5, 3) is False
    assert tree.add_subarea_to_area(1, 5) is False
    assert tree.add_subarea_to_area(6, 6) is False
    assert tree.subarea_in_areas(1) == []


def test_common_area(tree: AreaRegistry):
    assert tree.common_area_of_subareas(5, 3) == 1
    assert tree.common_area_of_subareas(4, 5) == 2
    # only proper ancestors count
    assert tree.common_area_of_subareas(1, 2) == NO_AREA
    assert tree.common_area_of_subareas(6, 3) == NO_AREA


def test_clear(tree: AreaRegistry):
    tree.clear()
    assert tree.all_areas() == []
    assert tree.add_area(1, "again", SQUARE)
    assert tree.subarea_in_areas(1) == []
