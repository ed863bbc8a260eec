# domain/graph/graph.py
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from taxi_path.domain.entities.routes import RoutableRoute


def _check_name(name) -> str:
    if not isinstance(name, str):
        raise TypeError(f"graph node names must be str, got {type(name).__name__}: {name!r}")
    return name


class Graph:
    """
    Undirected weighted graph keyed by taxi-rank id.
    Weights are non-negative costs (fares); re-adding an edge overwrites it.
    """

    def __init__(self):
        self._nodes: dict[str, dict[str, float]] = {}
        self._edge_routes: dict[frozenset[str], RoutableRoute] = {}

    @classmethod
    def from_routes(cls, routes: Iterable[RoutableRoute]) -> Graph:
        g = cls()
        for r in routes:
            g.add_edge(r.start_rank_id, r.end_rank_id, r.price)
            g._edge_routes[frozenset((r.start_rank_id, r.end_rank_id))] = r
        return g

    def add_node(self, name: str) -> None:
        self._nodes.setdefault(_check_name(name), {})

    def add_edge(self, a: str, b: str, weight: float) -> None:
        if weight < 0:
            raise ValueError(f"edge weight must be >= 0, got {weight} for ({a!r}, {b!r})")
        self.add_node(a)
        self.add_node(b)
        self._nodes[a][b] = weight
        self._nodes[b][a] = weight

    # ------------- read access -----------------

    def nodes(self) -> list[str]:
        return list(self._nodes)

    def neighbors(self, name: str) -> Mapping[str, float]:
        return self._nodes[name]

    def weight(self, a: str, b: str) -> float | None:
        return self._nodes.get(a, {}).get(b)

    def route_for(self, a: str, b: str) -> RoutableRoute | None:
        """Route that produced edge (a, b) when built via from_routes."""
        return self._edge_routes.get(frozenset((a, b)))

    def describe(self) -> Iterator[tuple[str, str | None, float | None]]:
        # one row per directed connection; isolated nodes yield (node, None, None)
        for name, edges in self._nodes.items():
            if not edges:
                yield name, None, None
            for nb, w in edges.items():
                yield name, nb, w

    def __contains__(self, name) -> bool:
        return name in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
