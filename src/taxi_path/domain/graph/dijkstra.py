# domain/graph/dijkstra.py
import math
from dataclasses import dataclass, field

from taxi_path.domain.graph.graph import Graph
from taxi_path.domain.graph.priority_queue import PriorityQueue


@dataclass(frozen=True)
class ShortestPath:
    total_cost: float
    path: list[str] = field(default_factory=list)

    @property
    def reachable(self) -> bool:
        return math.isfinite(self.total_cost) and bool(self.path)


UNREACHABLE = ShortestPath(math.inf, [])


def shortest_path(graph: Graph, start: str, destination: str) -> ShortestPath:
    """
    Dijkstra over non-negative weights with early exit at the destination.
    Returns ShortestPath(inf, []) when destination cannot be reached.
    """
    if start == destination:
        return ShortestPath(0.0, [start])
    if start not in graph or destination not in graph:
        return UNREACHABLE

    dist: dict[str, float] = {}
    prev: dict[str, str | None] = {}
    pq = PriorityQueue()
    for node in graph.nodes():
        dist[node] = 0.0 if node == start else math.inf
        prev[node] = None
        pq.enqueue(node, dist[node])

    while not pq.is_empty():
        u = pq.dequeue()
        if math.isinf(dist[u]) or u == destination:
            break
        for v, w in graph.neighbors(u).items():
            cand = dist[u] + w
            if cand < dist[v]:
                dist[v] = cand
                prev[v] = u
                pq.enqueue(v, cand)

    if math.isinf(dist[destination]):
        return UNREACHABLE

    path: list[str] = []
    step: str | None = destination
    while step is not None:
        path.append(step)
        step = prev[step]
    path.reverse()
    return ShortestPath(dist[destination], path)
