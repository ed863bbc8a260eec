# domain/routing/assembler.py
from taxi_path.domain.entities.geography import Coord
from taxi_path.domain.entities.itinerary import LegPrice, Prices
from taxi_path.domain.entities.routes import RoutableRoute
from taxi_path.domain.graph.graph import Graph

# ------------- legs -----------------------------


def direct_legs(src: RoutableRoute, dst: RoutableRoute) -> list[RoutableRoute]:
    """Legs when both snapped routes meet at a rank. One leg if they are the same ride."""
    if src.id == dst.id or src.ranks == dst.ranks:
        return [src]
    return [src, dst]


def choose_search_ranks(
    source: Coord, destination: Coord, src: RoutableRoute, dst: RoutableRoute
) -> tuple[str, str]:
    """
    Pick the (from, to) ranks for the graph search.

    Heading west (source east of destination) searches from the source route's
    start rank to the destination route's end rank; heading east uses the mirrored
    pair. Equal longitudes fall back to latitude, north counting as east; identical
    coordinates take the eastbound pair.
    """
    if source.lng != destination.lng:
        westbound = source.lng > destination.lng
    else:
        westbound = source.lat > destination.lat
    if westbound:
        return src.start_rank_id, dst.end_rank_id
    return src.end_rank_id, dst.start_rank_id


def transfer_legs(
    graph: Graph, path: list[str], src: RoutableRoute, dst: RoutableRoute
) -> list[RoutableRoute] | None:
    """
    Map consecutive ranks of a graph path back to routes, bracketed by the two
    snapped routes. None if a hop has no route behind it.
    """
    legs: list[RoutableRoute] = [src]
    for a, b in zip(path, path[1:]):
        # a hop the snapped routes already cover is ridden on them
        if src.connects(a, b):
            route = src
        elif dst.connects(a, b):
            route = dst
        else:
            route = graph.route_for(a, b)
        if route is None:
            return None
        legs.append(route)
    legs.append(dst)

    out: list[RoutableRoute] = []
    for leg in legs:
        if not out or out[-1].id != leg.id:
            out.append(leg)
    return out


# ------------- aggregation ----------------------


def price_breakdown(legs: list[RoutableRoute]) -> Prices:
    items = tuple(LegPrice(r.name, float(r.price), r.travel_method) for r in legs)
    return Prices(total=sum(p.price for p in items), legs=items)


def leg_directions(legs: list[RoutableRoute]) -> list[list[Coord]]:
    return [list(r.directions) for r in legs]


def ranks_along(legs: list[RoutableRoute]) -> list[str]:
    """Distinct rank ids in travel order."""
    seen: list[str] = []
    for i, leg in enumerate(legs):
        a, b = leg.ranks
        if seen:
            if b == seen[-1]:
                a, b = b, a
        elif i + 1 < len(legs) and a in legs[i + 1].ranks:
            a, b = b, a
        for r in (a, b):
            if r not in seen:
                seen.append(r)
    return seen
