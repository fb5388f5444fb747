# nav_route/search/route_planner.py
import threading
import time
from dataclasses import dataclass
from enum import Enum

from nav_route.app.protocols import EdgeCostEvaluator, GraphRoutePlanner
from nav_route.domain.entities.graph import Edge, Graph, Node
from nav_route.domain.entities.route import Route
from nav_route.domain.state import SearchStates, reset_search_states
from nav_route.errors import (
    InvalidRequest,
    IterationLimitExceeded,
    NoValidRouteFound,
    RouteError,
)
from nav_route.scoring.edge_scorer import EdgeScorer
from nav_route.search.hooks import NoopHooks, PlannerHooks
from nav_route.search.node_queue import NodeElement, NodeQueue


class SearchOutcome(Enum):
    GOAL_FOUND = "goal_found"
    EXHAUSTED = "exhausted"
    ITERATION_LIMIT = "iteration_limit"


@dataclass
class TraversalResult:
    outcome: SearchOutcome
    states: SearchStates
    iterations: int
    expanded: int


class RoutePlanner(GraphRoutePlanner):
    """
    Dijkstra search over a navigation graph.

    Edge costs come from the scorer chain unless the chain is empty or the
    edge's fixed cost is marked non-overridable. Search state lives in a fresh
    per-call arena, so one Graph may be shared by several planners. A single
    planner instance serializes its own calls since it owns the open set.
    """

    def __init__(
        self,
        max_iterations: int = 0,
        edge_scorer: EdgeCostEvaluator | None = None,
        hooks: PlannerHooks | None = None,
    ):
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
        self.max_iterations = max_iterations  # 0 => unbounded
        self.edge_scorer = edge_scorer if edge_scorer is not None else EdgeScorer()
        self.hooks = hooks or NoopHooks()
        self.queue = NodeQueue()
        self._goal: Node | None = None
        self._lock = threading.Lock()

    # ------------- public API -----------------

    def find_route(self, graph: Graph, start: int, goal: int) -> Route:
        for name, idx in (("start", start), ("goal", goal)):
            if not graph.contains(idx):
                raise self._failed(
                    InvalidRequest(f"{name} index {idx!r} is not a node of the graph"),
                    start, goal, "invalid_request",
                )

        if start == goal:
            route = Route.trivial(graph.node(start))
            self.hooks.route_found(start=start, goal=goal, cost=0.0, edges=0)
            return route

        result = self.find_shortest_graph_traversal(graph, graph.node(start), graph.node(goal))

        if result.outcome is SearchOutcome.EXHAUSTED:
            raise self._failed(
                NoValidRouteFound(f"no valid route from node {start} to node {goal}"),
                start, goal, result.outcome.value,
            )
        if result.outcome is SearchOutcome.ITERATION_LIMIT:
            raise self._failed(
                IterationLimitExceeded(
                    f"search from node {start} to node {goal} stopped after "
                    f"{result.iterations} iterations",
                    iterations=result.iterations,
                ),
                start, goal, result.outcome.value,
            )

        route = self._backtrace(graph, start, goal, result.states)
        self.hooks.route_found(
            start=start, goal=goal, cost=route.total_cost, edges=len(route.edges)
        )
        return route

    def try_find_route(self, graph: Graph, start: int, goal: int) -> Route:
        """Like find_route, but request failures become a failed Route."""
        try:
            return self.find_route(graph, start, goal)
        except RouteError as exc:
            return Route.failure(f"{type(exc).__name__}: {exc}")

    def _failed(self, err: RouteError, start, goal, reason: str) -> RouteError:
        self.hooks.route_failed(start=start, goal=goal, reason=reason, error=str(err))
        return err

    # ------------- search -----------------

    def find_shortest_graph_traversal(
        self, graph: Graph, start: Node, goal: Node
    ) -> TraversalResult:
        with self._lock:
            return self._search(graph, start, goal)

    def _search(self, graph: Graph, start: Node, goal: Node) -> TraversalResult:
        t0 = time.perf_counter()
        self.hooks.search_start(
            start=start.index, goal=goal.index, nodes=len(graph), max_iterations=self.max_iterations
        )
        states = reset_search_states(graph)
        self._clear_queue()
        self._goal = goal

        states.best_cost[start.index] = 0.0
        self._add_node(0.0, start)

        outcome = SearchOutcome.EXHAUSTED
        iterations = expanded = 0
        while self.queue and (self.max_iterations == 0 or iterations < self.max_iterations):
            iterations += 1
            cost, node = self._get_next_node()
            i = node.index

            # stale duplicate or already finalized
            if states.visited[i] or cost > states.best_cost[i]:
                continue

            states.visited[i] = True
            if self._is_goal(node):
                outcome = SearchOutcome.GOAL_FOUND
                break

            expanded += 1
            for edge in self._get_edges(node):
                valid, edge_cost = self._get_traversal_cost(edge)
                if not valid:
                    continue
                j = edge.end.index
                candidate = cost + edge_cost
                if candidate < states.best_cost[j]:
                    states.relax(j, candidate, edge)
                    self._add_node(candidate, edge.end)
        else:
            if self.queue:
                outcome = SearchOutcome.ITERATION_LIMIT

        self._goal = None
        self.hooks.search_end(
            outcome=outcome.value,
            iterations=iterations,
            expanded=expanded,
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return TraversalResult(outcome, states, iterations, expanded)

    def _backtrace(self, graph: Graph, start: int, goal: int, states: SearchStates) -> Route:
        edges: list[Edge] = []
        i = goal
        while i != start:
            e = states.parent_edge[i]
            edges.append(e)
            i = e.start.index
        edges.reverse()
        return Route(
            edges=edges,
            start_node=graph.node(start),
            total_cost=states.cost(goal),
            success=True,
        )

    # ------------- helpers -----------------

    def _get_traversal_cost(self, edge: Edge) -> tuple[bool, float]:
        if not edge.cost.overridable or self.edge_scorer.num_strategies == 0:
            return True, edge.cost.cost
        return self.edge_scorer.score(edge)

    def _get_next_node(self) -> NodeElement:
        return self.queue.get_next_node()

    def _add_node(self, cost: float, node: Node) -> None:
        self.queue.add_node(cost, node)

    def _get_edges(self, node: Node) -> list[Edge]:
        return node.edges

    def _clear_queue(self) -> None:
        self.queue.clear_queue()

    def _is_goal(self, node: Node) -> bool:
        return node is self._goal
