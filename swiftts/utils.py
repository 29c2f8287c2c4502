"""Shared utility functions for SwiftTS.

Provides async command execution, project-name validation, JSON output and
Rich-based operator messages.  Every message the CLI prints goes through the
shared ``console`` defined here.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from swiftts.config import PROJECT_NAME_PATTERN
from swiftts.errors import InvalidProjectNameError

console = Console()

_PROJECT_NAME_RE = re.compile(PROJECT_NAME_PATTERN)

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: int | None = 120,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously.

    Args:
        cmd: Shell command string or list of arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed
            (``None`` waits forever).
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  If *capture* is ``False``
        the stdout/stderr strings will be empty.  A timeout yields ``-1``
        and a missing executable yields ``127``; neither raises.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None
    cmd_str = cmd if isinstance(cmd, str) else " ".join(cmd)

    try:
        if isinstance(cmd, list):
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=stdout_pipe,
                stderr=stderr_pipe,
                cwd=str(cwd) if cwd else None,
                env=merged_env,
            )
        else:
            process = await asyncio.create_subprocess_shell(
                cmd,
                stdout=stdout_pipe,
                stderr=stderr_pipe,
                cwd=str(cwd) if cwd else None,
                env=merged_env,
            )
    except FileNotFoundError:
        return (127, "", f"Command not found: {cmd_str}")

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {cmd_str}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Project names
# ---------------------------------------------------------------------------


def is_valid_project_name(name: str) -> bool:
    """Return ``True`` if *name* only contains letters, digits, ``-`` and ``_``.

    Examples::

        is_valid_project_name("my-project_1") -> True
        is_valid_project_name("my project!")  -> False
    """
    return bool(name) and _PROJECT_NAME_RE.fullmatch(name) is not None


def validate_project_name(name: str) -> str:
    """Return *name* unchanged or raise ``InvalidProjectNameError``."""
    if not is_valid_project_name(name):
        raise InvalidProjectNameError(name)
    return name


# ---------------------------------------------------------------------------
# JSON output
# ---------------------------------------------------------------------------


def dump_json(data: dict[str, Any]) -> str:
    """Serialise *data* the way generated manifests are written (2-space indent)."""
    return json.dumps(data, indent=2, ensure_ascii=False)


async def save_json(data: dict[str, Any], path: str | Path) -> Path:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically and the write runs in a
    worker thread.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    await asyncio.to_thread(file_path.write_text, dump_json(data), "utf-8")
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[bold blue]{escape(message)}[/bold blue]")
