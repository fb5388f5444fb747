# runtime/registries.py
from collections.abc import Callable

from nav_route.app.protocols import EdgeScoringStrategy
from nav_route.config.models import (
    DistanceScorerModel,
    DynamicEdgesScorerModel,
    EdgeScorerModel,
    PenaltyScorerModel,
    RoutePlannerModel,
    ScorerUnion,
    SemanticScorerModel,
)
from nav_route.scoring.edge_scorer import EdgeScorer, WeightedStrategy
from nav_route.scoring.scorers import (
    DistanceScorer,
    DynamicEdgeContext,
    DynamicEdgesScorer,
    PenaltyScorer,
    SemanticScorer,
)
from nav_route.search.hooks import PlannerHooks
from nav_route.search.route_planner import RoutePlanner

ScorerFactory = Callable[[ScorerUnion, dict], EdgeScoringStrategy]

_scorer_registry: dict[str, ScorerFactory] = {}


# ------------------- Edge scorer registry ---------------------------


def register_scorer(kind: str):
    def deco(fn: ScorerFactory):
        _scorer_registry[kind] = fn
        return fn

    return deco


def make_scorer(cfg: ScorerUnion, *, deps: dict | None = None) -> EdgeScoringStrategy:
    try:
        factory = _scorer_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown scorer kind {cfg.kind!r}") from None
    return factory(cfg, {} if deps is None else deps)


@register_scorer("distance")
def _make_distance(cfg: DistanceScorerModel, deps):
    return DistanceScorer(length_field=cfg.length_field, speed_limit_field=cfg.speed_limit_field)


@register_scorer("penalty")
def _make_penalty(cfg: PenaltyScorerModel, deps):
    return PenaltyScorer(penalty_field=cfg.penalty_field)


@register_scorer("semantic")
def _make_semantic(cfg: SemanticScorerModel, deps):
    return SemanticScorer(
        cfg.class_costs, class_field=cfg.class_field, blocked_classes=set(cfg.blocked_classes)
    )


@register_scorer("dynamic_edges")
def _make_dynamic_edges(cfg: DynamicEdgesScorerModel, deps):
    """
    deps can include:
      - cfg.context: DynamicEdgeContext  # live state shared with the caller
    A fresh empty context is created when none is supplied.
    """
    ctx = deps.get(cfg.context)
    if ctx is None:
        ctx = deps[cfg.context] = DynamicEdgeContext()
    if not isinstance(ctx, DynamicEdgeContext):
        raise TypeError(
            f"deps[{cfg.context!r}] must be a DynamicEdgeContext, got {type(ctx).__name__}"
        )
    return DynamicEdgesScorer(ctx)


# --------------------- Chain & planner  ---------------------


def make_edge_scorer(
    cfg: EdgeScorerModel, *, deps: dict | None = None, hooks: PlannerHooks | None = None
) -> EdgeScorer:
    deps = {} if deps is None else deps
    entries = [
        WeightedStrategy(make_scorer(s, deps=deps), weight=s.weight, name=s.name or s.kind)
        for s in cfg.scorers
    ]
    return EdgeScorer(
        entries, aggregation=cfg.aggregation, negative_cost=cfg.negative_cost, hooks=hooks
    )


def make_route_planner(
    cfg: RoutePlannerModel, *, deps: dict | None = None, hooks: PlannerHooks | None = None
) -> RoutePlanner:
    scorer = make_edge_scorer(cfg.edge_scorer, deps=deps, hooks=hooks)
    return RoutePlanner(max_iterations=cfg.max_iterations, edge_scorer=scorer, hooks=hooks)
