# app/planner.py
import time
from collections.abc import Mapping

from pydantic import ValidationError

from taxi_path.app.hooks import NoopHooks, PlannerHooks
from taxi_path.app.outcomes import FailureKind, PlanFailure
from taxi_path.app.protocols import DistanceMetric, ShortestPathFn
from taxi_path.app.schemas import PlanRequest
from taxi_path.domain.entities.itinerary import Itinerary
from taxi_path.domain.graph.dijkstra import shortest_path
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
from taxi_path.domain.routing.locator import locate_endpoints
from taxi_path.domain.routing.metrics import HaversineMetric
from taxi_path.io.corpus import RouteCorpus

# pydantic error types that mean "the caller left it out"
_MISSING_TYPES = {"missing", "string_too_short"}


def _missing_fields(exc: ValidationError) -> list[str]:
    out = []
    for err in exc.errors():
        if err["type"] in _MISSING_TYPES or err.get("input", ...) is None:
            out.append(".".join(str(p) for p in err["loc"]) or "request")
    return out


class TripPlanner:
    """
    Plans one trip per call against a read-only corpus snapshot.

    Expected dead ends come back as PlanFailure; only integration bugs
    (malformed input shapes, bad ids or weights) raise.
    """

    def __init__(
        self,
        *,
        metric: DistanceMetric | None = None,
        max_distance_m: float | None = None,
        filter_by_province: bool = True,
        hooks: PlannerHooks | None = None,
        shortest_path_fn: ShortestPathFn = shortest_path,
    ):
        self.metric = metric or HaversineMetric()
        self.max_distance_m = max_distance_m
        self.filter_by_province = filter_by_province
        self.hooks = hooks or NoopHooks()
        self.shortest_path = shortest_path_fn

    def _fail(self, kind: FailureKind, message: str, t0: float) -> PlanFailure:
        failure = PlanFailure(kind, message)
        self.hooks.failure(failure=failure, ms=(time.perf_counter() - t0) * 1000)
        return failure

    def plan(self, request: PlanRequest | Mapping, corpus: RouteCorpus) -> Itinerary | PlanFailure:
        t0 = time.perf_counter()

        # 0) Validate request
        if isinstance(request, PlanRequest):
            req = request
        else:
            try:
                req = PlanRequest.model_validate(request)
            except ValidationError as e:
                missing = _missing_fields(e)
                if not missing:
                    raise
                return self._fail(
                    FailureKind.INPUT_MISSING, f"missing required fields: {', '.join(missing)}", t0
                )
        self.hooks.plan_start(request=req)
        source, destination = req.source_coord.to_coord(), req.destination_coord.to_coord()

        # 1) Scope the corpus and build routable structures
        if self.filter_by_province and corpus.ranks:
            corpus = corpus.for_provinces(req.source_province, req.destination_province)
        formatted = format_routes(corpus.routes, corpus.waypoints, corpus.directions)
        if formatted is None:
            return self._fail(
                FailureKind.CORPUS_FORMATTING_FAILURE,
                "route corpus references unknown routes",
                t0,
            )
        self.hooks.corpus_formatted(routes=len(formatted), dropped=formatted.dropped)
        if not formatted.routes and formatted.dropped:
            return self._fail(
                FailureKind.CORPUS_FORMATTING_FAILURE, "no route in the corpus has waypoints", t0
            )

        # 2) Snap both ends onto routes
        match = locate_endpoints(
            formatted.routes,
            source,
            destination,
            metric=self.metric,
            max_distance_m=self.max_distance_m,
        )
        self.hooks.nearest_located(side="source", nearest=match.source)
        self.hooks.nearest_located(side="destination", nearest=match.destination)
        if not match.ok:
            return self._fail(
                FailureKind.NO_NEAREST_ROUTE, f"no route near the {match.reason} point(s)", t0
            )
        src, dst = match.source.route, match.destination.route

        # 3) Direct when the routes share a rank, otherwise search the rank graph
        conn = resolve_connectivity(src.ranks, dst.ranks)
        self.hooks.connectivity(result=conn)
        search_cost = None
        if conn.connected:
            kind, legs = "direct", direct_legs(src, dst)
        else:
            graph = Graph.from_routes(formatted.routes.values())
            self.hooks.graph_built(graph=graph)
            start, goal = choose_search_ranks(source, destination, src, dst)
            result = self.shortest_path(graph, start, goal)
            self.hooks.shortest_path(start=start, destination=goal, result=result)
            if not result.reachable:
                return self._fail(
                    FailureKind.NO_PATH_FOUND, f"no path between ranks {start} and {goal}", t0
                )
            legs = transfer_legs(graph, result.path, src, dst)
            if legs is None:
                return self._fail(
                    FailureKind.NO_PATH_FOUND, f"path {result.path} has a hop without a route", t0
                )
            kind, search_cost = "transfer", result.total_cost

        # 4) Label the itinerary
        rank_ids = ranks_along(legs)
        taxi_ranks = corpus.resolve_ranks(rank_ids)
        if taxi_ranks is None:
            unknown = [r for r in rank_ids if r not in corpus.ranks]
            return self._fail(FailureKind.RANKS_UNRESOLVABLE, f"unknown taxi ranks {unknown}", t0)

        itinerary = Itinerary(
            kind=kind,
            source=source,
            point_close_to_source=match.source.point,
            destination=destination,
            point_close_to_dest=match.destination.point,
            legs=legs,
            prices=price_breakdown(legs),
            directions=leg_directions(legs),
            rank_ids=rank_ids,
            taxi_ranks=taxi_ranks,
            search_cost=search_cost,
        )
        self.hooks.plan_end(itinerary=itinerary, ms=(time.perf_counter() - t0) * 1000)
        return itinerary
