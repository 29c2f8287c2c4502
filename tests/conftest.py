"""Shared pytest fixtures for the SwiftTS test suite.

Provides reusable fixtures for:
- Temporary output and project directories
- Mock subprocess helpers
- Recording middleware and handlers for the dispatch core
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from swiftts.dispatch import Request, Response


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty parent directory new projects are generated into."""
    out = tmp_path / "workspace"
    out.mkdir()
    yield out


@pytest.fixture
def npm_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A directory holding a minimal package.json, set as the cwd."""
    project_dir = tmp_path / "existing-app"
    project_dir.mkdir()
    (project_dir / "package.json").write_text(
        json.dumps({"name": "existing-app", "version": "1.0.0", "scripts": {}}),
        encoding="utf-8",
    )
    monkeypatch.chdir(project_dir)
    yield project_dir


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Dispatch helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def call_log() -> list[str]:
    """Ordered record of which middleware/handlers ran."""
    return []


@pytest.fixture
def make_middleware(call_log: list[str]) -> Callable[..., Any]:
    """Factory for middleware that logs its name and optionally stops the chain."""

    def factory(name: str, *, proceed: bool = True) -> Callable[..., None]:
        def middleware(request: Request, response: Response, next) -> None:
            call_log.append(name)
            if proceed:
                next()
            else:
                response.status_code = 403
                response.end(f"stopped by {name}")

        return middleware

    return factory


@pytest.fixture
def make_handler(call_log: list[str]) -> Callable[..., Any]:
    """Factory for terminal handlers that log their name and write a body."""

    def factory(name: str = "handler", body: str = "ok") -> Callable[..., None]:
        def handler(request: Request, response: Response) -> None:
            call_log.append(name)
            response.end(body)

        return handler

    return factory
