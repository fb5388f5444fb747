import math
from dataclasses import dataclass, field

from nav_route.app.protocols import EdgeScoringStrategy
from nav_route.domain.entities.graph import Edge


def edge_length(edge: Edge, length_field: str = "length") -> float:
    L = edge.metadata.get(length_field)
    if L is not None:
        return float(L)
    (x0, y0), (x1, y1) = edge.start.coords, edge.end.coords
    return math.hypot(x1 - x0, y1 - y0)


class DistanceScorer(EdgeScoringStrategy):
    """Length of the edge, or traversal time when a speed limit is present."""

    def __init__(self, length_field: str = "length", speed_limit_field: str | None = None):
        self.length_field, self.speed_limit_field = length_field, speed_limit_field

    def score(self, edge: Edge) -> tuple[bool, float]:
        L = edge_length(edge, self.length_field)
        if self.speed_limit_field:
            v = edge.metadata.get(self.speed_limit_field)
            if v is not None and float(v) > 0.0:
                return True, L / float(v)
        return True, L


class PenaltyScorer(EdgeScoringStrategy):
    def __init__(self, penalty_field: str = "penalty"):
        self.penalty_field = penalty_field

    def score(self, edge: Edge) -> tuple[bool, float]:
        return True, float(edge.metadata.get(self.penalty_field, 0.0))


class SemanticScorer(EdgeScoringStrategy):
    def __init__(
        self,
        class_costs: dict[str, float],
        *,
        class_field: str = "class",
        blocked_classes: set[str] | frozenset[str] = frozenset(),
    ):
        self.class_costs, self.class_field = class_costs, class_field
        self.blocked = frozenset(blocked_classes)

    def score(self, edge: Edge) -> tuple[bool, float]:
        cls = edge.metadata.get(self.class_field)
        if cls is None:
            return True, 0.0
        if cls in self.blocked:
            return False, 0.0
        return True, float(self.class_costs.get(cls, 0.0))


@dataclass
class DynamicEdgeContext:
    """
    Live edge state owned by the caller (e.g. updated from obstacle reports).
    Scorers only read it; update it between searches, never during one.
    """

    closed_edges: set[int] = field(default_factory=set)
    adjusted_costs: dict[int, float] = field(default_factory=dict)

    def close(self, edge_id: int) -> None:
        self.closed_edges.add(edge_id)

    def reopen(self, edge_id: int) -> None:
        self.closed_edges.discard(edge_id)

    def adjust(self, edge_id: int, cost: float) -> None:
        self.adjusted_costs[edge_id] = cost

    def clear(self) -> None:
        self.closed_edges.clear()
        self.adjusted_costs.clear()


class DynamicEdgesScorer(EdgeScoringStrategy):
    def __init__(self, context: DynamicEdgeContext):
        self.context = context

    def score(self, edge: Edge) -> tuple[bool, float]:
        if edge.edge_id in self.context.closed_edges:
            return False, 0.0
        return True, float(self.context.adjusted_costs.get(edge.edge_id, 0.0))
