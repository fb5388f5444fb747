# search/node_queue.py
import heapq

from nav_route.domain.entities.graph import Node

NodeElement = tuple[float, Node]


class NodeQueue:
    """
    Min-heap open set keyed by cumulative cost.

    The same node may be pushed several times; callers drop stale entries
    when they pop them instead of doing a decrease-key.
    """

    def __init__(self):
        self._q: list[tuple[float, int, Node]] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._q)

    def __bool__(self) -> bool:
        return bool(self._q)

    def add_node(self, cost: float, node: Node) -> None:
        self._seq += 1
        heapq.heappush(self._q, (cost, self._seq, node))

    def get_next_node(self) -> NodeElement:
        cost, _, node = heapq.heappop(self._q)
        return cost, node

    def clear_queue(self) -> None:
        self._q.clear()
        self._seq = 0
