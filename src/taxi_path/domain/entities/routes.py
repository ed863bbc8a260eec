from dataclasses import dataclass, field

from taxi_path.domain.entities.geography import Coord


# ---- raw records, as read from the route store (ids not yet normalized)
@dataclass(frozen=True)
class RouteRecord:
    id: int | str
    name: str
    price: float
    start_rank_id: int | str
    end_rank_id: int | str
    travel_method: str | None = None
    route_type: str | None = None


@dataclass(frozen=True)
class WaypointRecord:
    route_id: int | str
    index: int  # route-index, ordering of the polyline
    lat: float
    lng: float


@dataclass(frozen=True)
class DirectionRecord:
    route_id: int | str
    index: int  # direction-index
    lat: float
    lng: float


# ---- routable structure
@dataclass(frozen=True)
class RoutableRoute:
    id: str
    name: str
    price: float
    start_rank_id: str
    end_rank_id: str
    travel_method: str | None = None
    route_type: str | None = None
    points: tuple[Coord, ...] = ()
    directions: tuple[Coord, ...] = field(default=(), repr=False)

    @property
    def ranks(self) -> tuple[str, str]:
        return self.start_rank_id, self.end_rank_id

    def connects(self, a: str, b: str) -> bool:
        return (self.start_rank_id, self.end_rank_id) in ((a, b), (b, a))
