"""Default controller and route table shipped with every project."""

from __future__ import annotations

import json

from swiftts.dispatch.http import Request, Response
from swiftts.dispatch.router import Router
from swiftts.dispatch.routes import RouteTable

GREETING = "Hello World!"


def hello(request: Request, response: Response) -> None:
    # Body is real JSON so it agrees with the Content-Type header.
    response.set_header("Content-Type", "application/json")
    response.end(json.dumps({"message": GREETING}))


def default_routes() -> RouteTable:
    """Route table with the single ``GET /`` entry."""
    return RouteTable({"GET /": hello})


def default_router() -> Router:
    """Router over :func:`default_routes` with no middleware."""
    return Router(default_routes())
