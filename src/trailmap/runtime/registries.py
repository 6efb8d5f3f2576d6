# runtime/registries.py
from collections.abc import Callable

from trailmap.domain.entities.geography import CoordLike
from trailmap.engine.planners import RoutePlanners
from trailmap.engine.search import RouteSearch, RouteStep

RouteFn = Callable[[CoordLike, CoordLike], list[RouteStep]]
RouteFactory = Callable[[dict], RouteFn]

_route_registry: dict[str, RouteFactory] = {}


def register_route(kind: str):
    def deco(fn: RouteFactory):
        _route_registry[kind] = fn
        return fn

    return deco


def route_kinds() -> list[str]:
    return sorted(_route_registry)


def make_route(kind: str, *, deps: dict) -> RouteFn:
    """
    deps must include:
      - 'search': RouteSearch
      - 'planners': RoutePlanners
    """
    try:
        factory = _route_registry[kind]
    except KeyError:
        raise ValueError(f"Unknown route kind {kind!r}")
    return factory(deps)


@register_route("any")
def _make_any(deps):
    search: RouteSearch = deps["search"]
    return search.route_any


@register_route("shortest_distance")
def _make_shortest(deps):
    planners: RoutePlanners = deps["planners"]
    return planners.route_shortest_distance


@register_route("least_crossroads")
def _make_least(deps):
    planners: RoutePlanners = deps["planners"]
    return planners.route_least_crossroads
