# engine/hooks.py
from typing import Protocol

from trailmap.domain.entities.geography import Coord, WayId


class EngineHooks(Protocol):
    def query_start(self, kind: str, *, src: Coord, dst: Coord | None, crossroads: int): ...
    def query_end(self, kind: str, *, found: bool, hops: int, ms: float): ...
    def mutation(self, op: str, *, way_id: WayId | None, ok: bool, ways: int): ...
    def error(self, kind: str, *, reason: str, **kw): ...


class NoopHooks:
    def query_start(self, *_, **__):
        pass

    def query_end(self, *_, **__):
        pass

    def mutation(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
