"""Version-control initialisation for generated projects."""

from __future__ import annotations

from pathlib import Path

from swiftts.errors import DelegateError
from swiftts.utils import run_command

GIT_INIT: list[str] = ["git", "init"]


async def init_repository(path: str | Path, timeout: int = 60) -> str:
    """Run ``git init`` inside *path* and return git's stdout.

    Raises:
        DelegateError: If git is missing, times out or exits non-zero.  The
            exception carries the command line, stderr and return code.
    """
    returncode, stdout, stderr = await run_command(GIT_INIT, cwd=path, timeout=timeout)
    if returncode != 0:
        raise DelegateError(
            f"git init failed (exit {returncode}) in {path}: {stderr or stdout}",
            command=" ".join(GIT_INIT),
            stderr=stderr,
            returncode=returncode,
        )
    return stdout
