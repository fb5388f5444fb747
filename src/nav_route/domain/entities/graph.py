import math
import operator
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from nav_route.errors import InvalidGraph

Coords = tuple[float, float]


@dataclass(frozen=True)
class EdgeCost:
    cost: float = 0.0
    overridable: bool = True  # False => scorers are never consulted for this edge


@dataclass(eq=False)
class Node:
    index: int  # position in the owning Graph, stable across searches
    node_id: int
    coords: Coords = (0.0, 0.0)
    metadata: dict[str, Any] = field(default_factory=dict)
    edges: list["Edge"] = field(default_factory=list, repr=False)

    def __repr__(self) -> str:
        return f"Node(index={self.index}, node_id={self.node_id})"


@dataclass(eq=False)
class Edge:
    edge_id: int
    start: Node
    end: Node
    cost: EdgeCost = field(default_factory=EdgeCost)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"Edge(edge_id={self.edge_id}, {self.start.index}->{self.end.index})"


class Graph:
    """
    Directed navigation graph.

    Nodes are addressed by their integer index (0..n-1, insertion order).
    Bidirectional segments are stored as two directed edges.
    """

    def __init__(self):
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def contains(self, index: int) -> bool:
        if isinstance(index, bool):
            return False
        try:
            i = operator.index(index)
        except TypeError:
            return False
        return 0 <= i < len(self._nodes)

    def node(self, index: int) -> Node:
        if not self.contains(index):
            raise IndexError(f"node index {index!r} out of range [0, {len(self._nodes)})")
        return self._nodes[operator.index(index)]

    def edges(self) -> Iterator[Edge]:
        return iter(self._edges)

    def get_edges(self, index: int) -> list[Edge]:
        return self.node(index).edges

    # ------------- construction -----------------

    def add_node(
        self,
        node_id: int | None = None,
        coords: Coords = (0.0, 0.0),
        metadata: dict[str, Any] | None = None,
    ) -> Node:
        index = len(self._nodes)
        n = Node(
            index=index,
            node_id=index if node_id is None else node_id,
            coords=(float(coords[0]), float(coords[1])),
            metadata=dict(metadata or {}),
        )
        self._nodes.append(n)
        return n

    def _resolve(self, ref: Node | int) -> Node:
        if isinstance(ref, Node):
            if ref.index >= len(self._nodes) or self._nodes[ref.index] is not ref:
                raise InvalidGraph(f"{ref!r} does not belong to this graph")
            return ref
        if not self.contains(ref):
            raise InvalidGraph(f"edge endpoint {ref!r} is not a node index of this graph")
        return self._nodes[ref]

    def add_edge(
        self,
        start: Node | int,
        end: Node | int,
        cost: float | None = None,
        *,
        edge_id: int | None = None,
        overridable: bool = True,
        metadata: dict[str, Any] | None = None,
    ) -> Edge:
        a, b = self._resolve(start), self._resolve(end)
        if cost is not None and not (math.isfinite(cost) and cost >= 0.0):
            raise InvalidGraph(f"edge cost must be finite and >= 0, got {cost!r}")
        e = Edge(
            edge_id=len(self._edges) if edge_id is None else edge_id,
            start=a,
            end=b,
            cost=EdgeCost(0.0 if cost is None else float(cost), overridable),
            metadata=dict(metadata or {}),
        )
        a.edges.append(e)
        self._edges.append(e)
        return e

    def add_bidirectional_edge(
        self,
        a: Node | int,
        b: Node | int,
        cost: float | None = None,
        *,
        overridable: bool = True,
        metadata: dict[str, Any] | None = None,
    ) -> tuple[Edge, Edge]:
        fwd = self.add_edge(a, b, cost, overridable=overridable, metadata=metadata)
        back = self.add_edge(b, a, cost, overridable=overridable, metadata=metadata)
        return fwd, back

    @classmethod
    def from_edge_list(
        cls,
        n_nodes: int,
        edges: Iterable[tuple[int, int, float] | tuple[int, int, float, dict[str, Any]]],
        *,
        coords: Iterable[Coords] | None = None,
    ) -> "Graph":
        """Build a graph from (start, end, cost[, metadata]) tuples."""
        g = cls()
        pts = list(coords) if coords is not None else [(0.0, 0.0)] * n_nodes
        if len(pts) != n_nodes:
            raise InvalidGraph(f"coords must have length {n_nodes}, got {len(pts)}")
        for p in pts:
            g.add_node(coords=p)
        for row in edges:
            u, v, c, *rest = row
            g.add_edge(u, v, c, metadata=rest[0] if rest else None)
        return g
