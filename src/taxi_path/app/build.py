# taxi_path/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from taxi_path.app.hooks import NoopHooks, PlannerHooks
from taxi_path.app.planner import TripPlanner
from taxi_path.app.protocols import DistanceMetric
from taxi_path.config.models import PlannerModel
from taxi_path.io.planner_logging import PlannerLogging  # JSON logs
from taxi_path.io.recorder import JsonlSink, Recorder, Sink
from taxi_path.runtime.registries import make_metric


@dataclass
class App:
    config: PlannerModel
    metric: DistanceMetric
    hooks: PlannerHooks
    recorder: Recorder | None
    planner: TripPlanner


def build(
    cfg: PlannerModel | Mapping | None = None,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = PlannerModel()
    else:
        model = cfg if isinstance(cfg, PlannerModel) else PlannerModel.model_validate(cfg)

    # 1) Distance metric
    metric = make_metric(model.metric)

    # 2) Hooks & analytics
    recorder = Recorder(*(sinks or [JsonlSink()])) if use_logging else None
    hooks = (
        PlannerLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Planner (inject deps explicitly)
    planner = TripPlanner(
        metric=metric,
        max_distance_m=model.snapping.max_distance_m,
        filter_by_province=model.search.filter_by_province,
        hooks=hooks,
    )
    return App(model, metric, hooks, recorder, planner)
