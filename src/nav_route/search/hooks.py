# search/hooks.py
from typing import Protocol


class PlannerHooks(Protocol):
    def search_start(self, *, start, goal, nodes, max_iterations): ...
    def search_end(self, *, outcome, iterations, expanded, wall_ms): ...
    def route_found(self, *, start, goal, cost, edges): ...
    def route_failed(self, *, start, goal, reason: str, error: str): ...
    def scorer_clamped(self, *, edge_id, strategy: str, cost: float): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def route_found(self, **_):
        pass

    def route_failed(self, **_):
        pass

    def scorer_clamped(self, **_):
        pass
