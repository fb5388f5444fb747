# nav_route/errors.py


class RouteError(Exception):
    """Base for failures of a single routing request."""


class InvalidRequest(RouteError):
    pass


class NoValidRouteFound(RouteError):
    pass


class IterationLimitExceeded(RouteError):
    def __init__(self, msg: str, *, iterations: int):
        super().__init__(msg)
        self.iterations = iterations


class InvalidGraph(ValueError):
    """Graph invariant violated while building the graph."""


class ScorerContractError(ValueError):
    """An edge scoring strategy returned a cost the search cannot use."""
