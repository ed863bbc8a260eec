# domain/routing/locator.py
import math
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Literal

import numpy as np

from taxi_path.app.protocols import DistanceMetric
from taxi_path.domain.entities.geography import Coord
from taxi_path.domain.entities.routes import RoutableRoute
from taxi_path.domain.routing.metrics import HaversineMetric

_DEFAULT_METRIC = HaversineMetric()


@dataclass(frozen=True)
class NearestRoute:
    route: RoutableRoute | None
    point: Coord | None
    distance: float  # meters; inf when nothing was found

    @property
    def found(self) -> bool:
        return self.route is not None


NOT_FOUND = NearestRoute(None, None, math.inf)


def locate_nearest_route(
    routes: Mapping[str, RoutableRoute],
    target: Coord,
    *,
    metric: DistanceMetric = _DEFAULT_METRIC,
    max_distance_m: float | None = None,
    exclude: Collection[str] = (),
) -> NearestRoute:
    """
    Exhaustive scan of every polyline point; returns the closest point and its route.
    Ties keep the first point seen (route insertion order, then polyline order).
    """
    best = NOT_FOUND
    for rid, route in routes.items():
        if rid in exclude or not route.points:
            continue
        lats = np.fromiter((p.lat for p in route.points), dtype=float, count=len(route.points))
        lngs = np.fromiter((p.lng for p in route.points), dtype=float, count=len(route.points))
        d = np.asarray(metric.distance_m(target.lat, target.lng, lats, lngs), dtype=float)
        i = int(np.argmin(d))
        dist = float(d[i])
        if max_distance_m is not None and dist > max_distance_m:
            continue
        if dist < best.distance:
            best = NearestRoute(route, route.points[i], dist)
    return best


@dataclass(frozen=True)
class EndpointMatch:
    ok: bool
    source: NearestRoute
    destination: NearestRoute
    reason: Literal["source", "destination", "both"] | None = None


def locate_endpoints(
    routes: Mapping[str, RoutableRoute],
    source: Coord,
    destination: Coord,
    *,
    metric: DistanceMetric = _DEFAULT_METRIC,
    max_distance_m: float | None = None,
    explored: tuple[Collection[str], Collection[str]] = ((), ()),
) -> EndpointMatch:
    """Snap both ends of a trip; `explored` holds route ids to skip per side."""
    src = locate_nearest_route(
        routes, source, metric=metric, max_distance_m=max_distance_m, exclude=explored[0]
    )
    dst = locate_nearest_route(
        routes, destination, metric=metric, max_distance_m=max_distance_m, exclude=explored[1]
    )
    if src.found and dst.found:
        return EndpointMatch(True, src, dst)
    if not src.found and not dst.found:
        reason = "both"
    else:
        reason = "source" if not src.found else "destination"
    return EndpointMatch(False, src, dst, reason)
