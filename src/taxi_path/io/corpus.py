# io/corpus.py
"""
In-memory route corpus handed to the planner by its host.

The host owns the store; this module only reshapes what it read. `from_rows`
understands the row layout of the Routes / MiniRoute / DirectionRoute / TaxiRank
tables (coordinates stored as [lng, lat] pairs).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from taxi_path.domain.entities.geography import Coord, TaxiRank
from taxi_path.domain.entities.routes import DirectionRecord, RouteRecord, WaypointRecord


def _lnglat(pair) -> tuple[float, float]:
    # stored as [lng, lat]
    lng, lat = pair
    return float(lat), float(lng)


def _expand_coords(rows: Iterable[Mapping], record_cls, coords_key: str) -> list:
    """
    Flatten polyline rows into per-point records.
    Each row is one chunk of a route's polyline, held in `coords_key`; chunks are
    ordered by their own index (`route_index`/`direction_index`/`ID`, first present
    wins) and points keep their order within a chunk.
    """
    by_route: dict[str, list[tuple[int, list]]] = {}
    for row in rows:
        order = next(
            (row[k] for k in ("route_index", "direction_index", "ID") if row.get(k) is not None),
            0,
        )
        by_route.setdefault(str(row["Route_ID"]), []).append((int(order), list(row[coords_key])))

    out = []
    for rid, chunks in by_route.items():
        chunks.sort(key=lambda c: c[0])
        i = 0
        for _, coords in chunks:
            for pair in coords:
                lat, lng = _lnglat(pair)
                out.append(record_cls(route_id=rid, index=i, lat=lat, lng=lng))
                i += 1
    return out


def rank_from_row(row: Mapping) -> TaxiRank:
    loc = row.get("location_coord")
    coord = None
    if isinstance(loc, Mapping):
        coord = Coord(float(loc.get("lat", loc.get("y"))), float(loc.get("lng", loc.get("x"))))
    elif loc is not None:
        coord = Coord(*_lnglat(loc))
    return TaxiRank(
        id=str(row["ID"]),
        name=row.get("name", ""),
        coord=coord,
        province=row.get("province"),
        address=row.get("address"),
        route_count=int(row.get("num_routes") or 0),
    )


@dataclass
class RouteCorpus:
    routes: list[RouteRecord] = field(default_factory=list)
    waypoints: list[WaypointRecord] = field(default_factory=list)
    directions: list[DirectionRecord] = field(default_factory=list)
    ranks: dict[str, TaxiRank] = field(default_factory=dict)

    @classmethod
    def from_rows(
        cls,
        routes: Iterable[Mapping],
        mini_routes: Iterable[Mapping] = (),
        direction_routes: Iterable[Mapping] = (),
        taxi_ranks: Iterable[Mapping] = (),
    ) -> RouteCorpus:
        records = [
            RouteRecord(
                id=row["ID"],
                name=row.get("name") or "",
                price=float(row["price"]),
                start_rank_id=row["TaxiRankStart_ID"],
                end_rank_id=row["TaxiRankDest_ID"],
                travel_method=row.get("travelMethod"),
                route_type=row.get("route_type"),
            )
            for row in routes
        ]
        ranks = {r.id: r for r in map(rank_from_row, taxi_ranks)}
        return cls(
            routes=records,
            waypoints=_expand_coords(mini_routes, WaypointRecord, "coords"),
            directions=_expand_coords(direction_routes, DirectionRecord, "direction_coords"),
            ranks=ranks,
        )

    def for_provinces(self, source: str, destination: str) -> RouteCorpus:
        """Ranks in either province, and the routes touching any of them."""
        wanted = {source, destination}
        ranks = {rid: r for rid, r in self.ranks.items() if r.province in wanted}
        routes = [
            r
            for r in self.routes
            if str(r.start_rank_id) in ranks or str(r.end_rank_id) in ranks
        ]
        # only strip rows of routes filtered out here; orphans stay for the formatter to reject
        gone = {str(r.id) for r in self.routes} - {str(r.id) for r in routes}
        return RouteCorpus(
            routes=routes,
            waypoints=[w for w in self.waypoints if str(w.route_id) not in gone],
            directions=[d for d in self.directions if str(d.route_id) not in gone],
            ranks=self.ranks,  # transfers may pass through ranks outside the provinces
        )

    def resolve_ranks(self, rank_ids: Iterable[str]) -> list[TaxiRank] | None:
        """TaxiRank records in the given order; None if any id is unknown."""
        out = []
        for rid in rank_ids:
            rank = self.ranks.get(rid)
            if rank is None:
                return None
            out.append(rank)
        return out
