# io/planner_logging.py
import json
import logging
import sys

from taxi_path.app.hooks import NoopHooks
from taxi_path.io.business_events import PlanCompletedBiz, PlanFailedBiz
from taxi_path.io.recorder import Recorder


def _default_json_logger(name="taxi_path", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


def _coord(c):
    return None if c is None else [c.lat, c.lng]


class PlannerLogging(NoopHooks):
    """
    One place to shape and emit structured logs for a planner, plus business
    events for finished plans.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._seq = 0
        self._open = False  # plan_start seen for the current request

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "seq": self._seq}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)

    # ------------- planner lifecycle --------------------------

    def plan_start(self, *, request):
        self._seq += 1
        self._open = True
        self._emit(
            "INFO",
            "plan_start",
            source=_coord(request.source_coord),
            destination=_coord(request.destination_coord),
            provinces=[request.source_province, request.destination_province],
        )

    def corpus_formatted(self, *, routes: int, dropped: tuple[str, ...]):
        if dropped:
            self._emit("WARNING", "routes_without_waypoints", dropped=list(dropped))
        self._emit("DEBUG", "corpus_formatted", routes=routes)

    def nearest_located(self, *, side: str, nearest):
        self._emit(
            "DEBUG",
            "nearest_located",
            side=side,
            route_id=nearest.route.id if nearest.route else None,
            point=_coord(nearest.point),
            distance_m=nearest.distance,
        )

    def connectivity(self, *, result):
        self._emit(
            "DEBUG", "connectivity", connected=result.connected, shared_rank_id=result.shared_rank_id
        )

    def graph_built(self, *, graph):
        self._emit("DEBUG", "graph_built", nodes=len(graph))
        if self.debug:
            for node, nb, w in graph.describe():
                self._emit("DEBUG", "graph_edge", node=node, neighbor=nb, weight=w)

    def shortest_path(self, *, start: str, destination: str, result):
        self._emit(
            "INFO",
            "shortest_path",
            start=start,
            destination=destination,
            cost=result.total_cost if result.reachable else None,
            path=result.path,
        )

    def plan_end(self, *, itinerary, ms: float):
        self._open = False
        route_ids = [r.id for r in itinerary.legs]
        self._emit(
            "INFO",
            "plan_end",
            kind=itinerary.kind,
            route_ids=route_ids,
            total_price=itinerary.prices.total,
            ms=ms,
        )
        self._biz(
            PlanCompletedBiz(
                run_id=self.run_id,
                seq=self._seq,
                name="PlanCompleted",
                kind=itinerary.kind,
                route_ids=route_ids,
                rank_ids=list(itinerary.rank_ids),
                total_price=itinerary.prices.total,
                ms=ms,
            )
        )

    def failure(self, *, failure, ms: float):
        # rejected before plan_start (bad input) still counts as its own request
        if not self._open:
            self._seq += 1
        self._open = False
        self._emit("ERROR", "plan_failed", reason=failure.kind.value, error=failure.message, ms=ms)
        self._biz(
            PlanFailedBiz(
                run_id=self.run_id,
                seq=self._seq,
                name="PlanFailed",
                reason=failure.kind.value,
                message=failure.message,
                ms=ms,
            )
        )
