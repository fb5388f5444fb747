# nav_route/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from nav_route.config.models import RouterModel
from nav_route.io.planner_logging import PlannerLogging  # JSON logs
from nav_route.runtime.registries import make_route_planner
from nav_route.scoring.scorers import DynamicEdgeContext
from nav_route.search.hooks import NoopHooks, PlannerHooks
from nav_route.search.route_planner import RoutePlanner


@dataclass
class App:
    config: RouterModel
    planner: RoutePlanner
    hooks: PlannerHooks
    deps: dict[str, Any] = field(default_factory=dict)

    def context(self, key: str = "dynamic_edges") -> DynamicEdgeContext:
        return self.deps[key]


def build(
    cfg: RouterModel | Mapping,
    *,
    deps: dict[str, Any] | None = None,
    use_logging: bool = True,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, RouterModel) else RouterModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        PlannerLogging(run_id=model.run_id, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Scorer chain + planner; live contexts missing from deps are created here
    deps = {} if deps is None else deps
    planner = make_route_planner(model.planner, deps=deps, hooks=hooks)

    return App(config=model, planner=planner, hooks=hooks, deps=deps)
