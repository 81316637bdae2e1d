"""The router capability and a default in-memory route table.

Barabara never matches requests itself. It only needs something with a
registration method per verb; a web framework's router usually fits,
and :class:`RouteTable` is provided for introspection, tests and for
mounting onto frameworks that take a list of routes.
"""

from collections.abc import Callable, Iterator
from typing import Any, Protocol, TypeAlias, runtime_checkable

from barabara.routing.route import RegisteredRoute

Handler: TypeAlias = Callable[..., Any]


@runtime_checkable
class RouterLike(Protocol):
    """Anything exposing one registration method per supported verb."""

    def head(self, path: str, handler: Handler) -> Any: ...
    def get(self, path: str, handler: Handler) -> Any: ...
    def post(self, path: str, handler: Handler) -> Any: ...
    def put(self, path: str, handler: Handler) -> Any: ...
    def patch(self, path: str, handler: Handler) -> Any: ...
    def delete(self, path: str, handler: Handler) -> Any: ...


class RouteTable:
    """Ordered record of verb + path registrations.

    Usage::

        table = RouteTable()
        table.get("/users", handler)
        table.compile()
        [(r.method, r.path) for r in table]  # [("get", "/users")]
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[RegisteredRoute] = []
        self._compiled = False

    def add(self, method: str, path: str, handler: Handler) -> None:
        """Record a registration. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(RegisteredRoute(method=method, path=path, handler=handler))

    def head(self, path: str, handler: Handler) -> None:
        self.add("head", path, handler)

    def get(self, path: str, handler: Handler) -> None:
        self.add("get", path, handler)

    def post(self, path: str, handler: Handler) -> None:
        self.add("post", path, handler)

    def put(self, path: str, handler: Handler) -> None:
        self.add("put", path, handler)

    def patch(self, path: str, handler: Handler) -> None:
        self.add("patch", path, handler)

    def delete(self, path: str, handler: Handler) -> None:
        self.add("delete", path, handler)

    @property
    def routes(self) -> list[RegisteredRoute]:
        """All registrations in the order they were made."""
        return list(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def __iter__(self) -> Iterator[RegisteredRoute]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
