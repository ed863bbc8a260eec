# app/hooks.py
from typing import Protocol


class PlannerHooks(Protocol):
    def plan_start(self, *, request): ...
    def corpus_formatted(self, *, routes: int, dropped: tuple[str, ...]): ...
    def nearest_located(self, *, side: str, nearest): ...
    def connectivity(self, *, result): ...
    def graph_built(self, *, graph): ...
    def shortest_path(self, *, start: str, destination: str, result): ...
    def plan_end(self, *, itinerary, ms: float): ...
    def failure(self, *, failure, ms: float): ...


class NoopHooks:
    def plan_start(self, **_):
        pass

    def corpus_formatted(self, **_):
        pass

    def nearest_located(self, **_):
        pass

    def connectivity(self, **_):
        pass

    def graph_built(self, **_):
        pass

    def shortest_path(self, **_):
        pass

    def plan_end(self, **_):
        pass

    def failure(self, **_):
        pass
