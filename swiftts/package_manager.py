"""Thin wrapper around the external package manager (npm by default).

Every operation builds an argument list, runs it in the project directory
through :func:`swiftts.utils.run_command`, and returns a ``CommandResult``.
Nothing here raises on a failed command; callers decide what a non-zero
return code means.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from swiftts.utils import run_command


class CommandResult(BaseModel):
    """Outcome of one delegated command."""

    command: list[str] = Field(default_factory=list)
    returncode: int = Field(default=0)
    stdout: str = Field(default="")
    stderr: str = Field(default="")

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


class PackageManager:
    """Runs package-manager commands inside a project directory.

    Attributes:
        executable: Package-manager binary (``npm``).
        cwd: Project directory the commands run in.
        timeout: Per-command timeout in seconds.
    """

    def __init__(
        self,
        executable: str = "npm",
        cwd: str | Path | None = None,
        timeout: int = 300,
    ) -> None:
        self.executable = executable
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.timeout = timeout

    async def _run(self, *args: str, stream: bool = False) -> CommandResult:
        cmd = [self.executable, *args]
        # Streamed commands (servers, watchers) run until the user stops them.
        returncode, stdout, stderr = await run_command(
            cmd,
            cwd=self.cwd,
            timeout=None if stream else self.timeout,
            capture=not stream,
        )
        return CommandResult(
            command=cmd, returncode=returncode, stdout=stdout, stderr=stderr
        )

    # -- Dependencies ------------------------------------------------------

    async def install(self, module: str, dev: bool = False) -> CommandResult:
        """``npm install <module> [--save-dev]``."""
        args = ["install", module]
        if dev:
            args.append("--save-dev")
        return await self._run(*args)

    async def uninstall(self, module: str, dev: bool = False) -> CommandResult:
        """``npm uninstall <module> [--save-dev]``."""
        args = ["uninstall", module]
        if dev:
            args.append("--save-dev")
        return await self._run(*args)

    # -- Scripts -----------------------------------------------------------

    async def run_script(self, name: str, *, stream: bool = False) -> CommandResult:
        """``npm run <name>``.

        With *stream* the child inherits the terminal and no timeout applies.
        """
        return await self._run("run", name, stream=stream)

    async def start(self) -> CommandResult:
        return await self._run("start", stream=True)

    async def test(self) -> CommandResult:
        return await self._run("test")
