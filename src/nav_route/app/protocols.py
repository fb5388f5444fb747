from typing import Protocol, runtime_checkable

from nav_route.domain.entities.graph import Edge, Graph
from nav_route.domain.entities.route import Route


# ------------- Scoring --------------------
@runtime_checkable
class EdgeScoringStrategy(Protocol):
    """
    Responsibilities:
      • Return (valid, cost) for a single directed edge.
      • valid=False vetoes the edge for the whole search; cost is then ignored.
      • cost must be a finite float >= 0.
    Must not mutate the edge or the graph it belongs to.
    """

    def score(self, edge: Edge) -> tuple[bool, float]: ...


@runtime_checkable
class EdgeCostEvaluator(Protocol):
    """Aggregated view over an ordered chain of strategies."""

    @property
    def num_strategies(self) -> int: ...

    def score(self, edge: Edge) -> tuple[bool, float]: ...


# ------------- Planning --------------------
@runtime_checkable
class GraphRoutePlanner(Protocol):
    def find_route(self, graph: Graph, start: int, goal: int) -> Route: ...
