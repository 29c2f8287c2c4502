"""Sequential middleware chain.

A middleware is any callable matching::

    def my_mw(request: Request, response: Response, next: Next) -> None: ...

It does its work and calls ``next()`` to continue, or returns without
calling it to stop the chain.  No base class required.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from typing import Protocol

from swiftts.dispatch.http import Request, Response
from swiftts.dispatch.routes import Handler

# Continuation handed to each middleware
Next = Callable[[], None]


class Middleware(Protocol):
    """Protocol for dispatch middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def cors(request: Request, response: Response, next: Next) -> None:
            response.set_header("Access-Control-Allow-Origin", "*")
            next()

        # Class middleware
        class RequireToken:
            def __call__(self, request, response, next) -> None:
                if "Authorization" not in request.headers:
                    response.status_code = 401
                    response.end("Unauthorized")
                    return
                next()
    """

    def __call__(self, request: Request, response: Response, next: Next) -> None: ...


def run_chain(
    middlewares: Iterable[Middleware],
    terminal: Handler,
    request: Request,
    response: Response,
) -> None:
    """Run *middlewares* in order, then *terminal*.

    The pending queue is private to this call.  Each middleware runs at most
    once and receives ``advance`` as its continuation; the terminal handler
    runs once the queue is empty.  Exceptions propagate to the caller.
    """
    pending: deque[Middleware] = deque(middlewares)

    def advance() -> None:
        if pending:
            middleware = pending.popleft()
            middleware(request, response, advance)
        else:
            terminal(request, response)

    advance()
