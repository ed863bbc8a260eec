from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False  # also log graph connections on every transfer search


# ----------------- METRICS ---------------------


class MetricHaversineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["haversine"] = "haversine"
    radius_m: float = Field(default=6_371_000.0, gt=0)


class MetricEquirectangularModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["equirectangular"] = "equirectangular"
    radius_m: float = Field(default=6_371_000.0, gt=0)


MetricUnion = Annotated[
    MetricHaversineModel | MetricEquirectangularModel,
    Field(discriminator="kind"),
]


# ----------------- SNAPPING / SEARCH ---------------------


class SnappingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # walking cap from a request coordinate to a route point; None => unbounded
    max_distance_m: float | None = 5100.0

    @field_validator("max_distance_m")
    @classmethod
    def _positive(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("max_distance_m must be > 0 or null")
        return v


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    filter_by_province: bool = True


# ------------------------------------------------------------------


class PlannerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "taxi-path"
    run_id: str = "local"
    log: LogModel = LogModel()
    metric: MetricUnion = Field(default_factory=MetricHaversineModel)
    snapping: SnappingModel = SnappingModel()
    search: SearchModel = SearchModel()
