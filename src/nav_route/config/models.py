import math
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- EDGE SCORERS ---------------------


class _ScorerBase(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str | None = None  # label used in logs; defaults to the kind
    weight: float = Field(default=1.0, ge=0, allow_inf_nan=False)  # weighted_sum only


class DistanceScorerModel(_ScorerBase):
    kind: Literal["distance"] = "distance"
    length_field: str = "length"
    speed_limit_field: str | None = None


class PenaltyScorerModel(_ScorerBase):
    kind: Literal["penalty"] = "penalty"
    penalty_field: str = "penalty"


class SemanticScorerModel(_ScorerBase):
    kind: Literal["semantic"] = "semantic"
    class_field: str = "class"
    class_costs: dict[str, float] = Field(default_factory=dict)
    blocked_classes: list[str] = Field(default_factory=list)

    @field_validator("class_costs")
    @classmethod
    def _nonneg_costs(cls, v: dict[str, float], info: ValidationInfo) -> dict[str, float]:
        bad = {k: c for k, c in v.items() if not (math.isfinite(c) and c >= 0)}
        if bad:
            raise ValueError(f"{info.field_name} must be finite and >= 0, got {bad}")
        return v


class DynamicEdgesScorerModel(_ScorerBase):
    kind: Literal["dynamic_edges"] = "dynamic_edges"
    context: str = "dynamic_edges"  # key of the live context in build deps


ScorerUnion = Annotated[
    DistanceScorerModel | PenaltyScorerModel | SemanticScorerModel | DynamicEdgesScorerModel,
    Field(discriminator="kind"),
]


class EdgeScorerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    aggregation: Literal["sum", "weighted_sum", "max"] = "sum"
    negative_cost: Literal["reject", "clamp"] = "reject"
    scorers: list[ScorerUnion] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self):
        labels = [s.name or s.kind for s in self.scorers]
        dupes = sorted({x for x in labels if labels.count(x) > 1})
        if dupes:
            raise ValueError(f"scorer names must be unique, duplicated: {dupes}")
        return self


# ----------------- ROUTE PLANNER ---------------------


class RoutePlannerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_iterations: int = Field(default=0, ge=0)  # 0 => unbounded
    edge_scorer: EdgeScorerModel = Field(default_factory=EdgeScorerModel)


# ------------------------------------------------------------------


class RouterModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    log: LogModel = LogModel()
    planner: RoutePlannerModel = Field(default_factory=RoutePlannerModel)
