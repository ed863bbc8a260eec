# taxi_path/io/business_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics events
@dataclass
class BizEvent:
    run_id: str
    seq: int  # per-planner request counter
    name: str  # stable event name


@dataclass
class PlanCompletedBiz(BizEvent):
    kind: Literal["direct", "transfer"]
    route_ids: list[str]
    rank_ids: list[str]
    total_price: float
    ms: float | None = None


@dataclass
class PlanFailedBiz(BizEvent):
    reason: str  # FailureKind value
    message: str
    ms: float | None = None
