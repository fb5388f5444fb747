# main.py
from nav_route.app.build import build
from nav_route.domain.entities.graph import Graph


def run():
    # A(0) -> B(1) -> D(3) is cheaper than A -> C(2) -> D
    graph = Graph.from_edge_list(4, [(0, 1, 1.0), (1, 3, 1.0), (0, 2, 1.0), (2, 3, 5.0)])

    app = build(
        {
            "name": "demo",
            "run_id": "demo-1",
            "planner": {
                "max_iterations": 1000,
                "edge_scorer": {
                    "aggregation": "sum",
                    "scorers": [{"kind": "penalty"}, {"kind": "dynamic_edges"}],
                },
            },
        }
    )
    # penalty scorer reads edge metadata; the fixed costs above feed it
    for e in graph.edges():
        e.metadata["penalty"] = e.cost.cost

    route = app.planner.find_route(graph, 0, 3)
    print(route.node_indices, route.total_cost)

    # close B -> D and replan
    app.context().close(route.edges[-1].edge_id)
    print(app.planner.try_find_route(graph, 0, 3).node_indices)


if __name__ == "__main__":
    run()
