# io/planner_logging.py
import json
import logging
import sys

from nav_route.search.hooks import NoopHooks


def _default_json_logger(name="nav_route", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class PlannerLogging(NoopHooks):
    """
    Structured logs for planner lifecycle events.
    Search start is only emitted in debug mode; results and failures always are.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # search lifecycle

    def search_start(self, *, start, goal, nodes, max_iterations):
        if self.debug:
            self._emit(
                "DEBUG", "search_start", start=start, goal=goal, nodes=nodes,
                max_iterations=max_iterations,
            )

    def search_end(self, *, outcome, iterations, expanded, wall_ms):
        self._emit(
            "INFO", "search_end", outcome=outcome, iterations=iterations, expanded=expanded,
            wall_ms=round(wall_ms, 3),
        )

    # results

    def route_found(self, *, start, goal, cost, edges):
        self._emit("INFO", "route_found", start=start, goal=goal, cost=cost, edges=edges)

    def route_failed(self, *, start, goal, reason, error):
        self._emit("WARNING", "route_failed", start=start, goal=goal, reason=reason, error=error)

    def scorer_clamped(self, *, edge_id, strategy, cost):
        self._emit("WARNING", "scorer_clamped", edge_id=edge_id, strategy=strategy, cost=cost)
