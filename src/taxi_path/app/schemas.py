# app/schemas.py
from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from taxi_path.domain.entities.geography import Coord
from taxi_path.domain.entities.itinerary import Itinerary


class CoordModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    lat: float = Field(ge=-90.0, le=90.0, validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(
        ge=-180.0, le=180.0, validation_alias=AliasChoices("lng", "lon", "longitude")
    )

    def to_coord(self) -> Coord:
        return Coord(self.lat, self.lng)

    @classmethod
    def of(cls, c: Coord) -> CoordModel:
        return cls(lat=c.lat, lng=c.lng)


class PlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    source_coord: CoordModel = Field(
        validation_alias=AliasChoices("sourceCoord", "sourceCoords", "source_coord")
    )
    source_province: str = Field(
        min_length=1, validation_alias=AliasChoices("sourceProvince", "source_province")
    )
    destination_coord: CoordModel = Field(
        validation_alias=AliasChoices("destinationCoord", "destinationCoords", "destination_coord")
    )
    destination_province: str = Field(
        min_length=1,
        validation_alias=AliasChoices("destinationProvince", "destination_province"),
    )


# ---------------- response ----------------------


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RouteOut(CamelModel):
    id: str
    name: str
    price: float
    travel_method: str | None = Field(default=None, alias="travelMethod")
    route_type: str | None = Field(default=None, alias="routeType")
    start_rank_id: str = Field(alias="taxiRankStartId")
    end_rank_id: str = Field(alias="taxiRankDestId")


class LegPriceOut(CamelModel):
    name: str
    price: float
    travel_method: str | None = Field(default=None, alias="travelMethod")


class PricesOut(CamelModel):
    total_price: float = Field(alias="totalPrice")
    list_of_prices: list[LegPriceOut] = Field(default_factory=list, alias="listOfPrices")


class TaxiRankOut(CamelModel):
    id: str
    name: str
    coord: CoordModel | None = None
    address: str | None = None


class PlanResponse(CamelModel):
    kind: Literal["direct", "transfer"]
    source_coord: CoordModel = Field(alias="sourceCoord")
    point_close_to_source: CoordModel = Field(alias="pointCloseToSource")
    dest_coord: CoordModel = Field(alias="destCoord")
    point_close_to_dest: CoordModel = Field(alias="pointCloseToDest")
    routes: list[RouteOut]
    prices: PricesOut
    directions: list[list[CoordModel]]
    chosen_taxi_ranks: list[TaxiRankOut] = Field(alias="chosenTaxiRanks")

    @classmethod
    def from_itinerary(cls, it: Itinerary) -> PlanResponse:
        return cls(
            kind=it.kind,
            source_coord=CoordModel.of(it.source),
            point_close_to_source=CoordModel.of(it.point_close_to_source),
            dest_coord=CoordModel.of(it.destination),
            point_close_to_dest=CoordModel.of(it.point_close_to_dest),
            routes=[
                RouteOut(
                    id=r.id,
                    name=r.name,
                    price=r.price,
                    travel_method=r.travel_method,
                    route_type=r.route_type,
                    start_rank_id=r.start_rank_id,
                    end_rank_id=r.end_rank_id,
                )
                for r in it.legs
            ],
            prices=PricesOut(
                total_price=it.prices.total,
                list_of_prices=[
                    LegPriceOut(name=p.name, price=p.price, travel_method=p.travel_method)
                    for p in it.prices.legs
                ],
            ),
            directions=[[CoordModel.of(c) for c in leg] for leg in it.directions],
            chosen_taxi_ranks=[
                TaxiRankOut(
                    id=t.id,
                    name=t.name,
                    coord=CoordModel.of(t.coord) if t.coord else None,
                    address=t.address,
                )
                for t in it.taxi_ranks
            ],
        )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
