"""Exact-match route table.

Routes are keyed by ``"<METHOD> <path>"``.  There is no pattern matching,
no parameter extraction and no normalisation: ``"GET /"`` matches only a
``GET`` request whose path is exactly ``/``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from types import MappingProxyType

from swiftts.dispatch.http import Request, Response
from swiftts.errors import DuplicateRouteError

Handler = Callable[[Request, Response], None]


def route_key(method: str, path: str) -> str:
    """Build the composite lookup key for *method* and *path*."""
    return f"{method} {path}"


class RouteTable:
    """Immutable mapping from route key to handler.

    Built once at startup.  The table keeps a private copy of the mapping it
    is given, so later changes to the source dict are not visible.
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Mapping[str, Handler] | None = None) -> None:
        self._routes: Mapping[str, Handler] = MappingProxyType(dict(routes or {}))

    @classmethod
    def from_pairs(
        cls, entries: Iterable[tuple[str, str, Handler]]
    ) -> "RouteTable":
        """Build a table from ``(method, path, handler)`` triples.

        Raises:
            DuplicateRouteError: If two entries share a route key.
        """
        routes: dict[str, Handler] = {}
        for method, path, handler in entries:
            key = route_key(method, path)
            if key in routes:
                raise DuplicateRouteError(key)
            routes[key] = handler
        return cls(routes)

    def lookup(self, method: str, path: str) -> Handler | None:
        """Return the handler for *method* and *path*, or ``None``."""
        return self._routes.get(route_key(method, path))

    def keys(self) -> list[str]:
        return list(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({sorted(self._routes)!r})"
