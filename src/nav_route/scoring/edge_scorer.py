# nav_route/scoring/edge_scorer.py
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from nav_route.app.protocols import EdgeCostEvaluator, EdgeScoringStrategy
from nav_route.domain.entities.graph import Edge
from nav_route.errors import ScorerContractError
from nav_route.search.hooks import NoopHooks, PlannerHooks

Aggregation = Literal["sum", "weighted_sum", "max"]
NegativeCostPolicy = Literal["reject", "clamp"]


@dataclass(frozen=True)
class WeightedStrategy:
    strategy: EdgeScoringStrategy
    weight: float = 1.0
    name: str | None = None

    def __post_init__(self):
        w = float(self.weight)
        if not (math.isfinite(w) and w >= 0.0):
            raise ValueError(f"weight must be finite and >= 0, got {self.weight!r}")

    @property
    def label(self) -> str:
        return self.name or type(self.strategy).__name__


class EdgeScorer(EdgeCostEvaluator):
    """
    Ordered chain of edge scoring strategies.

    Strategies run in configuration order. The first veto short-circuits the
    chain. Surviving contributions are combined with the configured aggregation:
      sum          -> c1 + c2 + ...
      weighted_sum -> w1*c1 + w2*c2 + ...
      max          -> max(c1, c2, ...)
    Each raw contribution is checked before weighting, and the aggregated total
    is checked again, so the search only ever sees finite, non-negative costs.
    """

    def __init__(
        self,
        strategies: Sequence[WeightedStrategy | EdgeScoringStrategy] = (),
        *,
        aggregation: Aggregation = "sum",
        negative_cost: NegativeCostPolicy = "reject",
        hooks: PlannerHooks | None = None,
    ):
        if aggregation not in ("sum", "weighted_sum", "max"):
            raise ValueError(f"Unknown aggregation {aggregation!r}")
        if negative_cost not in ("reject", "clamp"):
            raise ValueError(f"Unknown negative_cost policy {negative_cost!r}")
        self.entries: list[WeightedStrategy] = [
            s if isinstance(s, WeightedStrategy) else WeightedStrategy(s) for s in strategies
        ]
        self.aggregation = aggregation
        self.negative_cost = negative_cost
        self.hooks = hooks or NoopHooks()

    @property
    def num_strategies(self) -> int:
        return len(self.entries)

    def _checked(self, entry: WeightedStrategy, edge: Edge, cost) -> float:
        c = float(cost)
        if not math.isfinite(c):
            raise ScorerContractError(
                f"{entry.label} returned non-finite cost {c!r} for edge {edge.edge_id}"
            )
        if c < 0.0:
            if self.negative_cost == "reject":
                raise ScorerContractError(
                    f"{entry.label} returned negative cost {c!r} for edge {edge.edge_id}"
                )
            self.hooks.scorer_clamped(edge_id=edge.edge_id, strategy=entry.label, cost=c)
            c = 0.0
        return c

    def score(self, edge: Edge) -> tuple[bool, float]:
        total = 0.0
        for entry in self.entries:
            valid, cost = entry.strategy.score(edge)
            if not valid:
                return False, 0.0
            c = self._checked(entry, edge, cost)
            if self.aggregation == "sum":
                total += c
            elif self.aggregation == "weighted_sum":
                total += entry.weight * c
            else:
                total = max(total, c)
        if not math.isfinite(total):
            raise ScorerContractError(
                f"aggregated cost {total!r} for edge {edge.edge_id} is not finite"
            )
        return True, total
