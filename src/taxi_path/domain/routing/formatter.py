# domain/routing/formatter.py
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from taxi_path.domain.entities.geography import Coord
from taxi_path.domain.entities.routes import (
    DirectionRecord,
    RoutableRoute,
    RouteRecord,
    WaypointRecord,
)


@dataclass
class FormattedCorpus:
    routes: dict[str, RoutableRoute] = field(default_factory=dict)
    dropped: tuple[str, ...] = ()  # route ids without waypoints

    def __len__(self) -> int:
        return len(self.routes)


def _ordered(records, route_id: str) -> tuple[Coord, ...]:
    return tuple(Coord(r.lat, r.lng) for r in sorted(records.get(route_id, ()), key=lambda r: r.index))


def format_routes(
    routes: Iterable[RouteRecord],
    waypoints: Iterable[WaypointRecord],
    directions: Iterable[DirectionRecord] = (),
) -> FormattedCorpus | None:
    """
    Turn raw route/waypoint/direction records into routable structures keyed by route id.

    Ids are converted to str here and nowhere else. Returns None when a waypoint or
    direction points at a route that is not in `routes`; routes with no waypoints are
    left out and listed in `dropped`.
    """
    routes = list(routes)
    known = {str(r.id) for r in routes}

    by_route_pts: dict[str, list[WaypointRecord]] = defaultdict(list)
    for w in waypoints:
        rid = str(w.route_id)
        if rid not in known:
            return None
        by_route_pts[rid].append(w)

    by_route_dirs: dict[str, list[DirectionRecord]] = defaultdict(list)
    for d in directions:
        rid = str(d.route_id)
        if rid not in known:
            return None
        by_route_dirs[rid].append(d)

    out: dict[str, RoutableRoute] = {}
    dropped: list[str] = []
    for r in routes:
        rid = str(r.id)
        if r.price < 0:
            raise ValueError(f"route {rid} has a negative price: {r.price}")
        points = _ordered(by_route_pts, rid)
        if not points:
            dropped.append(rid)
            continue
        out[rid] = RoutableRoute(
            id=rid,
            name=r.name,
            price=float(r.price),
            start_rank_id=str(r.start_rank_id),
            end_rank_id=str(r.end_rank_id),
            travel_method=r.travel_method,
            route_type=r.route_type,
            points=points,
            directions=_ordered(by_route_dirs, rid),
        )
    return FormattedCorpus(routes=out, dropped=tuple(dropped))
