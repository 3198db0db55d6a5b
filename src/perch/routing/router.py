"""Compiled router with exact path matching.

Form apps expose a handful of fixed paths, so the table is a plain
``path -> method -> Route`` mapping. ``HEAD`` falls back to ``GET``.
"""

from perch.errors import ConfigurationError, MethodNotAllowed, NotFound
from perch.routing.route import Route, RouteMatch


def normalize_path(path: str) -> str:
    """Collapse a path to its canonical form (``/a/b/`` -> ``/a/b``)."""
    parts = [p for p in path.split("/") if p]
    return "/" + "/".join(parts)


class Router:
    """Route table keyed by normalized path.

    Usage::

        router = Router()
        router.add(Route("/submit", handler, frozenset({"POST"})))
        router.compile()
        match = router.match("POST", "/submit")
    """

    __slots__ = ("_compiled", "_table")

    def __init__(self) -> None:
        self._table: dict[str, dict[str, Route]] = {}
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before ``compile()``.

        Raises:
            ConfigurationError: If the path uses parameters, or the same
                method is registered twice for one path.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        if "{" in route.path or "<" in route.path:
            msg = f"Route {route.path!r}: path parameters are not supported."
            raise ConfigurationError(msg)

        by_method = self._table.setdefault(normalize_path(route.path), {})
        for method in route.methods:
            if method in by_method:
                msg = f"Duplicate route: {method} {route.path!r}"
                raise ConfigurationError(msg)
            by_method[method] = route

    @property
    def routes(self) -> list[Route]:
        """All registered routes, each listed once, in registration order."""
        seen: dict[int, Route] = {}
        for by_method in self._table.values():
            for route in by_method.values():
                seen.setdefault(id(route), route)
        return list(seen.values())

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path.

        Raises:
            NotFound: No route is registered for the path.
            MethodNotAllowed: The path exists but not for this method.
        """
        by_method = self._table.get(normalize_path(path))
        if not by_method:
            raise NotFound()

        route = by_method.get(method)
        if route is None and method == "HEAD":
            route = by_method.get("GET")
        if route is None:
            raise MethodNotAllowed(frozenset(by_method))
        return RouteMatch(route=route, method=method)
