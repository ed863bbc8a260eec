from dataclasses import dataclass
from enum import Enum


class FailureKind(Enum):
    INPUT_MISSING = "input_missing"
    CORPUS_FORMATTING_FAILURE = "corpus_formatting_failure"
    NO_NEAREST_ROUTE = "no_nearest_route"
    RANKS_UNRESOLVABLE = "ranks_unresolvable"
    NO_PATH_FOUND = "no_path_found"


class PlanningError(RuntimeError):
    def __init__(self, failure: "PlanFailure"):
        super().__init__(f"{failure.kind.value}: {failure.message}")
        self.failure = failure


@dataclass(frozen=True)
class PlanFailure:
    kind: FailureKind
    message: str

    def raise_for_failure(self):
        raise PlanningError(self)
