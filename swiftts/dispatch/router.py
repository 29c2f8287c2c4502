"""Request router: route-table lookup followed by the middleware chain."""

from __future__ import annotations

from collections.abc import Sequence

from swiftts.dispatch.chain import Middleware, run_chain
from swiftts.dispatch.http import Request, Response
from swiftts.dispatch.routes import RouteTable

NOT_FOUND_STATUS = 404
NOT_FOUND_BODY = "Route not found"


class Router:
    """Resolves a request to a handler and dispatches it.

    The route table and the middleware sequence are fixed at construction.
    Each call to :meth:`route` gets its own chain state, so one router can
    serve any number of requests.
    """

    __slots__ = ("middlewares", "routes")

    def __init__(
        self,
        routes: RouteTable,
        middlewares: Sequence[Middleware] = (),
    ) -> None:
        self.routes = routes
        self.middlewares: tuple[Middleware, ...] = tuple(middlewares)

    def route(self, request: Request, response: Response) -> None:
        """Dispatch *request*, writing exactly one response.

        Unmatched requests get a 404 and never reach the middleware chain.
        """
        handler = self.routes.lookup(request.method, request.path)
        if handler is None:
            response.status_code = NOT_FOUND_STATUS
            response.end(NOT_FOUND_BODY)
            return
        run_chain(self.middlewares, handler, request, response)

    __call__ = route
