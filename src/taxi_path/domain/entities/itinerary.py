from dataclasses import dataclass, field
from typing import Literal

from taxi_path.domain.entities.geography import Coord, TaxiRank
from taxi_path.domain.entities.routes import RoutableRoute


@dataclass(frozen=True)
class LegPrice:
    name: str
    price: float
    travel_method: str | None = None


@dataclass(frozen=True)
class Prices:
    total: float
    legs: tuple[LegPrice, ...] = ()


@dataclass
class Itinerary:
    kind: Literal["direct", "transfer"]
    source: Coord
    point_close_to_source: Coord
    destination: Coord
    point_close_to_dest: Coord
    legs: list[RoutableRoute]
    prices: Prices
    directions: list[list[Coord]] = field(default_factory=list)  # one list per leg
    rank_ids: list[str] = field(default_factory=list)  # travel order
    taxi_ranks: list[TaxiRank] = field(default_factory=list)
    search_cost: float | None = None  # graph cost, transfer itineraries only
