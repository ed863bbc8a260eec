# runtime/registries.py
from collections.abc import Callable

from taxi_path.app.protocols import DistanceMetric
from taxi_path.config.models import (
    MetricEquirectangularModel,
    MetricHaversineModel,
    MetricUnion,
)
from taxi_path.domain.routing.metrics import EquirectangularMetric, HaversineMetric

MetricFactory = Callable[[MetricUnion], DistanceMetric]

_metric_registry: dict[str, MetricFactory] = {}


# ------------------- Distance metric registry ---------------------------


def register_metric(kind: str):
    def deco(fn: MetricFactory):
        _metric_registry[kind] = fn
        return fn

    return deco


def make_metric(cfg: MetricUnion) -> DistanceMetric:
    try:
        factory = _metric_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown metric kind {cfg.kind!r}")
    return factory(cfg)


@register_metric("haversine")
def _make_haversine(cfg: MetricHaversineModel):
    return HaversineMetric(cfg.radius_m)


@register_metric("equirectangular")
def _make_equirectangular(cfg: MetricEquirectangularModel):
    return EquirectangularMetric(cfg.radius_m)
