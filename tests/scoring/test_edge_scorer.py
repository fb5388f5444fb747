# tests/scoring/test_edge_scorer.py
import math

import pytest

from nav_route.domain.entities.graph import Graph
from nav_route.errors import ScorerContractError
from nav_route.scoring.edge_scorer import EdgeScorer, WeightedStrategy
from nav_route.search.hooks import NoopHooks


class _Const:
    def __init__(self, cost, valid=True):
        self.cost, self.valid, self.calls = cost, valid, 0

    def score(self, edge):
        self.calls += 1
        return self.valid, self.cost


@pytest.fixture
def edge():
    g = Graph.from_edge_list(2, [(0, 1, 1.0)])
    return next(g.edges())


def test_empty_chain_is_valid_zero(edge):
    s = EdgeScorer()
    assert s.num_strategies == 0
    assert s.score(edge) == (True, 0.0)


def test_sum_aggregation(edge):
    s = EdgeScorer([_Const(1.5), _Const(2.0)])
    assert s.score(edge) == (True, 3.5)


def test_weighted_sum_uses_weights(edge):
    s = EdgeScorer(
        [WeightedStrategy(_Const(1.0), weight=2.0), WeightedStrategy(_Const(3.0), weight=0.5)],
        aggregation="weighted_sum",
    )
    assert s.score(edge) == (True, 3.5)


def test_sum_ignores_weights(edge):
    s = EdgeScorer([WeightedStrategy(_Const(1.0), weight=10.0)], aggregation="sum")
    assert s.score(edge) == (True, 1.0)


def test_max_aggregation(edge):
    s = EdgeScorer([_Const(1.0), _Const(4.0), _Const(2.0)], aggregation="max")
    assert s.score(edge) == (True, 4.0)


def test_veto_short_circuits_regardless_of_others(edge):
    later = _Const(1.0)
    s = EdgeScorer([_Const(100.0), _Const(0.0, valid=False), later])
    assert s.score(edge) == (False, 0.0)
    assert later.calls == 0


def test_order_is_configuration_order(edge):
    seen = []

    class _Rec:
        def __init__(self, tag):
            self.tag = tag

        def score(self, e):
            seen.append(self.tag)
            return True, 0.0

    EdgeScorer([_Rec("a"), _Rec("b"), _Rec("c")]).score(edge)
    assert seen == ["a", "b", "c"]


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_costs_always_rejected(edge, bad):
    with pytest.raises(ScorerContractError):
        EdgeScorer([_Const(bad)], negative_cost="clamp").score(edge)


def test_negative_cost_rejected_by_default(edge):
    with pytest.raises(ScorerContractError):
        EdgeScorer([_Const(-0.1)]).score(edge)


def test_negative_cost_clamped_and_reported(edge):
    class _Hooks(NoopHooks):
        def __init__(self):
            self.clamped = []

        def scorer_clamped(self, *, edge_id, strategy, cost):
            self.clamped.append((edge_id, strategy, cost))

    hooks = _Hooks()
    s = EdgeScorer(
        [WeightedStrategy(_Const(-3.0), name="bad"), _Const(2.0)],
        negative_cost="clamp",
        hooks=hooks,
    )
    assert s.score(edge) == (True, 2.0)
    assert hooks.clamped == [(0, "bad", -3.0)]


def test_unknown_policies_rejected():
    with pytest.raises(ValueError):
        EdgeScorer(aggregation="median")
    with pytest.raises(ValueError):
        EdgeScorer(negative_cost="ignore")


def test_scoring_does_not_touch_edge(edge):
    before = (edge.cost, dict(edge.metadata))
    EdgeScorer([_Const(1.0)]).score(edge)
    assert (edge.cost, edge.metadata) == before


@pytest.mark.parametrize("bad", [-1.0, math.nan, math.inf])
def test_weights_must_be_finite_and_non_negative(bad):
    with pytest.raises(ValueError):
        WeightedStrategy(_Const(1.0), weight=bad)


def test_weighted_overflow_is_a_contract_error(edge):
    s = EdgeScorer(
        [WeightedStrategy(_Const(1e308), weight=10.0), _Const(1e308)],
        aggregation="weighted_sum",
    )
    with pytest.raises(ScorerContractError):
        s.score(edge)


def test_sum_overflow_is_a_contract_error(edge):
    with pytest.raises(ScorerContractError):
        EdgeScorer([_Const(1e308), _Const(1e308)]).score(edge)
