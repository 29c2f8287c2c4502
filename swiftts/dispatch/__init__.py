"""SwiftTS dispatch core -- exact-match routing plus a ``next``-style middleware chain.

Quick usage::

    from swiftts.dispatch import Request, Response, Router, RouteTable, hello

    def log_requests(request, response, next):
        print(request.method, request.path)
        next()

    router = Router(RouteTable({"GET /": hello}), [log_requests])
    response = Response()
    router.route(Request("GET", "/"), response)
"""

from swiftts.dispatch.chain import Middleware, Next, run_chain
from swiftts.dispatch.controllers import default_router, default_routes, hello
from swiftts.dispatch.http import Request, Response
from swiftts.dispatch.router import NOT_FOUND_BODY, NOT_FOUND_STATUS, Router
from swiftts.dispatch.routes import Handler, RouteTable, route_key

__all__ = [
    "Handler",
    "Middleware",
    "NOT_FOUND_BODY",
    "NOT_FOUND_STATUS",
    "Next",
    "Request",
    "Response",
    "RouteTable",
    "Router",
    "default_router",
    "default_routes",
    "hello",
    "route_key",
    "run_chain",
]
