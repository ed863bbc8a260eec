# tests/domain/test_routing.py
import math

import pytest

from taxi_path.domain.entities.geography import Coord
from taxi_path.domain.entities.routes import (
    DirectionRecord,
    RoutableRoute,
    RouteRecord,
    WaypointRecord,
)
from taxi_path.domain.graph.graph import Graph
from taxi_path.domain.routing.assembler import (
    choose_search_ranks,
    direct_legs,
    leg_directions,
    price_breakdown,
    ranks_along,
    transfer_legs,
)
from taxi_path.domain.routing.connectivity import resolve_connectivity
from taxi_path.domain.routing.formatter import format_routes
from taxi_path.domain.routing.locator import locate_endpoints, locate_nearest_route
from taxi_path.domain.routing.metrics import EquirectangularMetric, HaversineMetric


def route(rid, start, end, price=10.0, points=(), directions=(), **kw) -> RoutableRoute:
    return RoutableRoute(
        id=rid,
        name=f"route {rid}",
        price=price,
        start_rank_id=start,
        end_rank_id=end,
        points=tuple(Coord(*p) for p in points),
        directions=tuple(Coord(*p) for p in directions),
        **kw,
    )


# ---------- RouteFormatter


def test_formatter_orders_points_and_normalizes_ids():
    routes = [RouteRecord(id=1, name="Bree-Soweto", price=18, start_rank_id=4, end_rank_id=5)]
    waypoints = [
        WaypointRecord(route_id=1, index=2, lat=-26.2, lng=28.2),
        WaypointRecord(route_id=1, index=0, lat=-26.0, lng=28.0),
        WaypointRecord(route_id="1", index=1, lat=-26.1, lng=28.1),
    ]
    directions = [
        DirectionRecord(route_id=1, index=1, lat=-26.15, lng=28.15),
        DirectionRecord(route_id=1, index=0, lat=-26.05, lng=28.05),
    ]
    out = format_routes(routes, waypoints, directions)
    assert out is not None and out.dropped == ()
    r = out.routes["1"]
    assert (r.start_rank_id, r.end_rank_id) == ("4", "5")
    assert [p.lat for p in r.points] == [-26.0, -26.1, -26.2]
    assert [p.lat for p in r.directions] == [-26.05, -26.15]
    assert r.price == 18.0


def test_formatter_drops_routes_without_waypoints():
    routes = [
        RouteRecord(id=1, name="a", price=5, start_rank_id=1, end_rank_id=2),
        RouteRecord(id=2, name="b", price=5, start_rank_id=2, end_rank_id=3),
    ]
    out = format_routes(routes, [WaypointRecord(1, 0, -26.0, 28.0)])
    assert list(out.routes) == ["1"]
    assert out.dropped == ("2",)


def test_formatter_rejects_inconsistent_input():
    routes = [RouteRecord(id=1, name="a", price=5, start_rank_id=1, end_rank_id=2)]
    assert format_routes(routes, [WaypointRecord(99, 0, -26.0, 28.0)]) is None
    assert (
        format_routes(
            routes, [WaypointRecord(1, 0, -26.0, 28.0)], [DirectionRecord(42, 0, -26.0, 28.0)]
        )
        is None
    )


def test_formatter_empty_corpus_is_empty_not_failure():
    out = format_routes([], [])
    assert out is not None
    assert len(out) == 0 and out.dropped == ()


def test_formatter_negative_price_is_an_error():
    routes = [RouteRecord(id=1, name="a", price=-1, start_rank_id=1, end_rank_id=2)]
    with pytest.raises(ValueError):
        format_routes(routes, [WaypointRecord(1, 0, -26.0, 28.0)])


# ---------- Metrics


def test_metrics_agree_at_city_scale():
    h, e = HaversineMetric(), EquirectangularMetric()
    d_h = float(h.distance_m(-26.0, 28.0, -26.1, 28.1))
    d_e = float(e.distance_m(-26.0, 28.0, -26.1, 28.1))
    assert 14_000 < d_h < 16_000
    assert abs(d_h - d_e) / d_h < 1e-3
    assert float(h.distance_m(-26.0, 28.0, -26.0, 28.0)) == 0.0


# ---------- NearestRouteLocator


def test_locator_picks_closer_waypoint():
    routes = {"r": route("r", "1", "2", points=[(-26.0, 28.0), (-26.1, 28.1)])}
    target = Coord(-26.05, 28.05)
    metric = HaversineMetric()
    res = locate_nearest_route(routes, target, metric=metric)
    d = [float(metric.distance_m(target.lat, target.lng, p.lat, p.lng)) for p in routes["r"].points]
    assert res.route is routes["r"]
    assert res.point == routes["r"].points[d.index(min(d))]
    assert res.distance == pytest.approx(min(d))
    assert res.distance >= 0


def test_locator_scans_all_routes():
    routes = {
        "far": route("far", "1", "2", points=[(-25.0, 27.0), (-25.1, 27.1)]),
        "near": route("near", "3", "4", points=[(-26.30, 28.30), (-26.01, 28.01)]),
    }
    res = locate_nearest_route(routes, Coord(-26.0, 28.0))
    assert res.route.id == "near"
    assert res.point == Coord(-26.01, 28.01)


def test_locator_is_deterministic_and_keeps_first_tie():
    routes = {
        "a": route("a", "1", "2", points=[(-26.0, 28.1)]),
        "b": route("b", "3", "4", points=[(-26.0, 28.1)]),
    }
    results = {locate_nearest_route(routes, Coord(-26.0, 28.0)) for _ in range(5)}
    assert len(results) == 1
    assert results.pop().route.id == "a"


def test_locator_empty_corpus():
    res = locate_nearest_route({}, Coord(-26.0, 28.0))
    assert res.route is None and res.point is None
    assert math.isinf(res.distance)
    assert not res.found


def test_locator_distance_cap_and_exclusions():
    routes = {
        "a": route("a", "1", "2", points=[(-26.0, 28.01)]),  # ~1 km
        "b": route("b", "3", "4", points=[(-26.0, 28.05)]),  # ~5 km
    }
    target = Coord(-26.0, 28.0)
    assert not locate_nearest_route(routes, target, max_distance_m=500).found
    assert locate_nearest_route(routes, target, max_distance_m=2_000).route.id == "a"
    assert locate_nearest_route(routes, target, exclude={"a"}).route.id == "b"


def test_locate_endpoints_reports_failed_side():
    routes = {"a": route("a", "1", "2", points=[(-26.0, 28.0)])}
    ok = locate_endpoints(routes, Coord(-26.0, 28.0), Coord(-26.0, 28.001))
    assert ok.ok and ok.reason is None
    miss = locate_endpoints(
        routes, Coord(-26.0, 28.0), Coord(-20.0, 30.0), max_distance_m=1_000
    )
    assert not miss.ok and miss.reason == "destination"
    assert locate_endpoints({}, Coord(0, 0), Coord(1, 1)).reason == "both"
    skip = locate_endpoints(routes, Coord(-26.0, 28.0), Coord(-26.0, 28.0), explored=({"a"}, ()))
    assert skip.reason == "source"


# ---------- ConnectivityResolver


@pytest.mark.parametrize(
    "src,dst,shared",
    [
        (("1", "5"), ("5", "9"), "5"),
        (("5", "1"), ("9", "5"), "5"),
        (("5", "1"), ("5", "9"), "5"),
        (("1", "5"), ("9", "5"), "5"),
        (("1", "5"), ("1", "5"), "1"),
    ],
)
def test_connectivity_shared_rank(src, dst, shared):
    c = resolve_connectivity(src, dst)
    assert c.connected and c.shared_rank_id == shared


def test_connectivity_disjoint_or_missing():
    assert not resolve_connectivity(("1", "2"), ("3", "4")).connected
    c = resolve_connectivity((None, "2"), ("2", "4"))
    assert not c.connected and c.shared_rank_id is None


# ---------- PathAssembler pieces


def test_direct_legs_dedupes_same_ride():
    a = route("a", "4", "5", price=12)
    b = route("b", "5", "6", price=9)
    twin = route("a2", "4", "5", price=11)
    assert direct_legs(a, b) == [a, b]
    assert direct_legs(a, a) == [a]
    assert direct_legs(a, twin) == [a]
    assert price_breakdown(direct_legs(a, b)).total == 21


@pytest.mark.parametrize(
    "source,destination,expected",
    [
        (Coord(-26.0, 28.3), Coord(-26.0, 28.0), ("1", "4")),  # westbound
        (Coord(-26.0, 28.0), Coord(-26.0, 28.3), ("2", "3")),  # eastbound
        (Coord(-25.9, 28.0), Coord(-26.0, 28.0), ("1", "4")),  # same lng, source north
        (Coord(-26.1, 28.0), Coord(-26.0, 28.0), ("2", "3")),  # same lng, source south
        (Coord(-26.0, 28.0), Coord(-26.0, 28.0), ("2", "3")),
    ],
)
def test_choose_search_ranks(source, destination, expected):
    src, dst = route("s", "1", "2"), route("d", "3", "4")
    assert choose_search_ranks(source, destination, src, dst) == expected


def test_transfer_legs_maps_hops_and_brackets_with_snapped_routes():
    r1, r2, r3 = route("r1", "1", "2"), route("r2", "2", "3"), route("r3", "3", "4")
    g = Graph.from_routes([r1, r2, r3])
    assert transfer_legs(g, ["2", "3"], r1, r3) == [r1, r2, r3]
    # path that already rides the snapped routes does not repeat them
    assert transfer_legs(g, ["1", "2", "3", "4"], r1, r3) == [r1, r2, r3]


def test_transfer_legs_prefers_snapped_route_on_shared_hop():
    r1 = route("r1", "1", "2", price=10)
    alt = route("alt", "2", "1", price=4)
    r3 = route("r3", "2", "3", price=6)
    g = Graph.from_routes([r1, alt, r3])
    assert g.route_for("1", "2") is alt
    legs = transfer_legs(g, ["1", "2", "3"], r1, r3)
    assert legs == [r1, r3]
    # fare follows the ridden route, not the cheaper parallel edge that was searched
    assert price_breakdown(legs).total == 16.0
    assert g.weight("1", "2") + g.weight("2", "3") == 10.0


def test_transfer_legs_unknown_hop():
    r1, r3 = route("r1", "1", "2"), route("r3", "3", "4")
    g = Graph()
    g.add_edge("2", "3", 1)  # not backed by a route
    assert transfer_legs(g, ["2", "3"], r1, r3) is None


def test_aggregation_helpers():
    r1 = route("r1", "1", "2", price=10, directions=[(-26.0, 28.0), (-26.0, 28.05)])
    r2 = route("r2", "3", "2", price=12.5, travel_method="taxi")
    legs = [r1, r2]
    prices = price_breakdown(legs)
    assert prices.total == 22.5
    assert [(p.name, p.price, p.travel_method) for p in prices.legs] == [
        ("route r1", 10.0, None),
        ("route r2", 12.5, "taxi"),
    ]
    assert leg_directions(legs) == [[Coord(-26.0, 28.0), Coord(-26.0, 28.05)], []]
    assert ranks_along(legs) == ["1", "2", "3"]


def test_ranks_along_orients_first_leg():
    legs = [route("r3", "3", "4"), route("r2", "2", "3"), route("r1", "1", "2")]
    assert ranks_along(legs) == ["4", "3", "2", "1"]
