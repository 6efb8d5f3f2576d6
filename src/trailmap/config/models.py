from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1

    @field_validator("sample_every")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("sample_every must be >= 1")
        return v


class RoutingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # planner used by Atlas.route(); route_any etc. stay available by name
    default: Literal["any", "shortest_distance", "least_crossroads"] = "any"


# ----------------- RANDOM MAPS ---------------------


class GeneratorModel(BaseModel):
    """Sizes and extent of a seeded random map."""

    model_config = ConfigDict(extra="forbid")
    seed: int = 123
    places: int = 0
    areas: int = 0
    crossroads: int = 0
    ways: int = 0
    bends_max: int = 2  # intermediate polyline points per way
    extent: tuple[int, int, int, int] = (0, 0, 10_000, 10_000)  # x0, y0, x1, y1

    @field_validator("places", "areas", "crossroads", "ways", "bends_max")
    def _nonneg(cls, v: int, info: ValidationInfo) -> int:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @model_validator(mode="after")
    def _check_shape(self):
        x0, y0, x1, y1 = self.extent
        if x1 <= x0 or y1 <= y0:
            raise ValueError("extent must be (x0, y0, x1, y1) with x1 > x0 and y1 > y0")
        if self.ways and self.crossroads < 2:
            raise ValueError("ways need at least 2 crossroads")
        return self


# ------------------------------------------------------------------


class AtlasModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "atlas"
    run_id: str = "local"
    log: LogModel = LogModel()
    routing: RoutingModel = RoutingModel()
    generator: GeneratorModel | None = None
    seed_map: bool = Field(default=False, description="populate from `generator` on build")

    @model_validator(mode="after")
    def _seed_needs_generator(self):
        if self.seed_map and self.generator is None:
            raise ValueError("seed_map requires a generator section")
        return self
