"""Minimal request/response pair handed to handlers and middleware.

``Request`` is plain data.  ``Response`` is a writer: handlers set the
status and headers, then call :meth:`Response.end` exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from swiftts.errors import ResponseAlreadyFinished


@dataclass
class Request:
    """An incoming request as seen by the router."""

    method: str
    url: str = "/"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def path(self) -> str:
        """Request target without query string or fragment (``"/"`` when empty).

        The target is not normalised: ``"//"`` stays ``"//"``.
        """
        target = self.url.partition("#")[0].partition("?")[0]
        return target or "/"


class Response:
    """Mutable response written by exactly one handler or middleware."""

    def __init__(self) -> None:
        self.status_code: int = 200
        self.headers: dict[str, str] = {}
        self.body: bytes = b""
        self.finished: bool = False

    def set_header(self, name: str, value: str) -> None:
        if self.finished:
            raise ResponseAlreadyFinished("Cannot set a header after the response ended")
        self.headers[name] = value

    def end(self, body: str | bytes = b"") -> None:
        """Write *body* and mark the response finished.

        Raises:
            ResponseAlreadyFinished: If the response was already ended.
        """
        if self.finished:
            raise ResponseAlreadyFinished("Response has already been written")
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.finished = True

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def __repr__(self) -> str:
        return (
            f"Response(status_code={self.status_code}, "
            f"finished={self.finished}, body={self.body!r})"
        )
