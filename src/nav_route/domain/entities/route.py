from dataclasses import dataclass, field

from nav_route.domain.entities.graph import Edge, Node


@dataclass
class Route:
    edges: list[Edge] = field(default_factory=list)
    start_node: Node | None = None
    total_cost: float = 0.0
    success: bool = False
    reason: str | None = None  # set on failed routes only

    @classmethod
    def trivial(cls, node: Node) -> "Route":
        return cls(edges=[], start_node=node, total_cost=0.0, success=True)

    @classmethod
    def failure(cls, reason: str) -> "Route":
        # no partial path on failure
        return cls(edges=[], start_node=None, total_cost=0.0, success=False, reason=reason)

    @property
    def nodes(self) -> list[Node]:
        if self.start_node is None:
            return []
        return [self.start_node, *(e.end for e in self.edges)]

    @property
    def node_indices(self) -> list[int]:
        return [n.index for n in self.nodes]

    @property
    def edge_ids(self) -> list[int]:
        return [e.edge_id for e in self.edges]
