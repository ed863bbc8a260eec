from typing import Protocol, runtime_checkable

from taxi_path.domain.graph.dijkstra import ShortestPath
from taxi_path.domain.graph.graph import Graph


# ------------- Routing --------------------
@runtime_checkable
class DistanceMetric(Protocol):
    """
    Distance in meters between (lat1, lng1) and (lat2, lng2), in degrees.
    Must broadcast over numpy arrays so the nearest-route scan can vectorise
    a whole polyline at once.
    """

    def distance_m(self, lat1, lng1, lat2, lng2): ...


@runtime_checkable
class ShortestPathFn(Protocol):
    def __call__(self, graph: Graph, start: str, destination: str) -> ShortestPath: ...
