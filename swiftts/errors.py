"""Exception hierarchy for SwiftTS.

Scaffolding and delegate errors are raised by the library layer and turned
into coloured messages and exit codes by the CLI.  Dispatch errors propagate
to whatever hosts the router.
"""

from __future__ import annotations


class SwiftTSError(Exception):
    """Base class for every error raised by SwiftTS."""


# ---------------------------------------------------------------------------
# Scaffolding
# ---------------------------------------------------------------------------


class InvalidProjectNameError(SwiftTSError, ValueError):
    """Raised when a project name contains characters outside ``[A-Za-z0-9_-]``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Invalid project name '{name}': only letters, digits, "
            "hyphens and underscores are allowed."
        )


class ProjectExistsError(SwiftTSError):
    """Raised when the target project directory already exists."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Directory '{path}' already exists.")


class ScaffoldError(SwiftTSError):
    """Raised when project generation fails part-way through."""


# ---------------------------------------------------------------------------
# External commands
# ---------------------------------------------------------------------------


class DelegateError(SwiftTSError):
    """Raised when an external command (git, npm) fails."""

    def __init__(
        self,
        message: str,
        command: str = "",
        stderr: str = "",
        returncode: int = 1,
    ) -> None:
        self.command = command
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(message)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class DuplicateRouteError(SwiftTSError):
    """Raised when two handlers are registered under the same route key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Route '{key}' is already registered")


class ResponseAlreadyFinished(SwiftTSError):
    """Raised when ``Response.end`` is called a second time."""
