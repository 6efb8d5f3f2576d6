# trailmap/app/atlas.py
from collections.abc import Mapping
from dataclasses import dataclass

from trailmap.config.models import AtlasModel
from trailmap.domain.areas import AreaRegistry
from trailmap.domain.entities.geography import Coord, CoordLike, Distance, WayId
from trailmap.domain.entities.places import AreaId, Name, PlaceId, PlaceType
from trailmap.domain.places import PlaceRegistry
from trailmap.domain.ways import WayIndex
from trailmap.engine.hooks import EngineHooks, NoopHooks
from trailmap.engine.planners import RoutePlanners, trim_ways
from trailmap.engine.search import CycleStep, RouteSearch, RouteStep
from trailmap.gen.random_map import MapSummary, populate
from trailmap.gen.rng import MapStreams
from trailmap.io.query_logging import QueryLogging
from trailmap.runtime.registries import RouteFn, make_route


@dataclass
class Atlas:
    places: PlaceRegistry
    areas: AreaRegistry
    ways: WayIndex
    search: RouteSearch
    planners: RoutePlanners
    default_route: RouteFn

    # ----------------- places -----------------------

    def place_count(self) -> int:
        return self.places.place_count()

    def all_places(self) -> list[PlaceId]:
        return self.places.all_places()

    def add_place(self, pid: PlaceId, name: Name, ptype: PlaceType, xy: CoordLike) -> bool:
        return self.places.add_place(pid, name, ptype, xy)

    def get_place_name_type(self, pid: PlaceId) -> tuple[Name, PlaceType]:
        return self.places.get_place_name_type(pid)

    def get_place_coord(self, pid: PlaceId) -> Coord:
        return self.places.get_place_coord(pid)

    def places_alphabetically(self) -> list[PlaceId]:
        return self.places.places_alphabetically()

    def places_coord_order(self) -> list[PlaceId]:
        return self.places.places_coord_order()

    def find_places_name(self, name: Name) -> list[PlaceId]:
        return self.places.find_places_name(name)

    def find_places_type(self, ptype: PlaceType) -> list[PlaceId]:
        return self.places.find_places_type(ptype)

    def change_place_name(self, pid: PlaceId, newname: Name) -> bool:
        return self.places.change_place_name(pid, newname)

    def change_place_coord(self, pid: PlaceId, newcoord: CoordLike) -> bool:
        return self.places.change_place_coord(pid, newcoord)

    def remove_place(self, pid: PlaceId) -> bool:
        return self.places.remove_place(pid)

    def places_closest_to(self, xy: CoordLike, ptype: PlaceType) -> list[PlaceId]:
        return self.places.places_closest_to(xy, ptype)

    # ----------------- areas -----------------------

    def add_area(self, aid: AreaId, name: Name, coords) -> bool:
        return self.areas.add_area(aid, name, coords)

    def get_area_name(self, aid: AreaId) -> Name:
        return self.areas.get_area_name(aid)

    def get_area_coords(self, aid: AreaId) -> list[Coord]:
        return self.areas.get_area_coords(aid)

    def all_areas(self) -> list[AreaId]:
        return self.areas.all_areas()

    def add_subarea_to_area(self, aid: AreaId, parentid: AreaId) -> bool:
        return self.areas.add_subarea_to_area(aid, parentid)

    def subarea_in_areas(self, aid: AreaId) -> list[AreaId]:
        return self.areas.subarea_in_areas(aid)

    def all_subareas_in_area(self, aid: AreaId) -> list[AreaId]:
        return self.areas.all_subareas_in_area(aid)

    def common_area_of_subareas(self, id1: AreaId, id2: AreaId) -> AreaId:
        return self.areas.common_area_of_subareas(id1, id2)

    def clear_all(self) -> None:
        # ways have their own clear_ways()
        self.places.clear()
        self.areas.clear()

    # ----------------- ways -----------------------

    def all_ways(self) -> list[WayId]:
        return self.ways.all_ways()

    def add_way(self, way_id: WayId, coords) -> bool:
        return self.ways.add_way(way_id, coords)

    def remove_way(self, way_id: WayId) -> bool:
        return self.ways.remove_way(way_id)

    def ways_from(self, xy: CoordLike) -> list[tuple[WayId, Coord]]:
        return self.ways.ways_from(xy)

    def get_way_coords(self, way_id: WayId) -> list[Coord]:
        return self.ways.get_way_coords(way_id)

    def clear_ways(self) -> None:
        self.ways.clear()

    # ----------------- routes -----------------------

    def route(self, fromxy: CoordLike, toxy: CoordLike) -> list[RouteStep]:
        return self.default_route(fromxy, toxy)

    def route_any(self, fromxy: CoordLike, toxy: CoordLike) -> list[RouteStep]:
        return self.search.route_any(fromxy, toxy)

    def route_with_cycle(self, fromxy: CoordLike) -> list[CycleStep]:
        return self.search.route_with_cycle(fromxy)

    def route_shortest_distance(self, fromxy: CoordLike, toxy: CoordLike) -> list[RouteStep]:
        return self.planners.route_shortest_distance(fromxy, toxy)

    def route_least_crossroads(self, fromxy: CoordLike, toxy: CoordLike) -> list[RouteStep]:
        return self.planners.route_least_crossroads(fromxy, toxy)

    def trim_ways(self) -> Distance:
        return trim_ways(self.ways)

    # ----------------- random data -----------------------

    def seed_random(self, model: AtlasModel) -> MapSummary:
        if model.generator is None:
            raise ValueError("no generator configured")
        streams = MapStreams(model.generator.seed, name=model.name)
        return populate(
            model.generator, streams=streams, places=self.places, areas=self.areas, ways=self.ways
        )


def build(cfg: AtlasModel | Mapping | None = None, *, use_logging: bool = True) -> Atlas:
    # 0) Validate config
    if cfg is None:
        model = AtlasModel()
    else:
        model = cfg if isinstance(cfg, AtlasModel) else AtlasModel.model_validate(cfg)

    # 1) Hooks
    hooks: EngineHooks = (
        QueryLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Registries and engine share one way index
    ways = WayIndex(hooks=hooks)
    search = RouteSearch(ways, hooks=hooks)
    planners = RoutePlanners(ways, hooks=hooks)
    default_route = make_route(model.routing.default, deps={"search": search, "planners": planners})

    atlas = Atlas(
        places=PlaceRegistry(),
        areas=AreaRegistry(),
        ways=ways,
        search=search,
        planners=planners,
        default_route=default_route,
    )

    # 3) Optional random content
    if model.seed_map:
        atlas.seed_random(model)

    return atlas
