# nav_route/domain/state.py
from dataclasses import dataclass

import numpy as np

from nav_route.domain.entities.graph import Edge, Graph


@dataclass(frozen=True)
class NodeSearchState:
    visited: bool
    best_cost: float
    parent_edge: Edge | None


@dataclass
class SearchStates:
    """
    Transient per-search state, one slot per node index.
    Created fresh for every search so long-lived Graph nodes are never written to.
    """

    visited: np.ndarray  # bool[n]
    best_cost: np.ndarray  # float64[n]
    parent_edge: list[Edge | None]

    def __len__(self) -> int:
        return len(self.parent_edge)

    def __getitem__(self, index: int) -> NodeSearchState:
        return NodeSearchState(
            visited=bool(self.visited[index]),
            best_cost=float(self.best_cost[index]),
            parent_edge=self.parent_edge[index],
        )

    def cost(self, index: int) -> float:
        return float(self.best_cost[index])

    def relax(self, index: int, cost: float, via: Edge) -> None:
        self.best_cost[index] = cost
        self.parent_edge[index] = via


def reset_search_states(graph: Graph) -> SearchStates:
    n = len(graph)
    return SearchStates(
        visited=np.zeros(n, dtype=bool),
        best_cost=np.full(n, np.inf, dtype=np.float64),
        parent_edge=[None] * n,
    )
