from dataclasses import dataclass


# Core geometry types used by routing
@dataclass(frozen=True)
class Coord:
    lat: float  # degrees WGS84
    lng: float

    def as_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class TaxiRank:
    id: str
    name: str
    coord: Coord | None = None
    province: str | None = None
    address: str | None = None
    route_count: int = 0
