"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and generates a TypeScript HTTP service project:
server entry point, exact-match router, middleware chain, sample controller,
``package.json`` and ``.swcrc``, plus an optional ``vercel.json`` and git
repository.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from swiftts.errors import ProjectExistsError, ScaffoldError
from swiftts.utils import validate_project_name

from .manifest_gen import ManifestGenerator
from .templates import TemplateRenderer
from .vcs import init_repository


PROJECT_DIRECTORIES: tuple[str, ...] = (
    "src",
    "src/controllers",
    "src/middlewares",
    "src/router",
)


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Pydantic model describing the project to scaffold."""

    name: str = Field(..., description="Project name, also the directory name")
    description: str = Field(default="", description="package.json description")
    version: str = Field(default="1.0.0", description="Initial package.json version")
    port: int = Field(default=3000, ge=1, le=65535, description="Port the server listens on")
    git_init: bool = Field(default=False, description="Run `git init` in the new project")
    vercel: bool = Field(default=False, description="Also write a vercel.json deployment descriptor")

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_project_name(value)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectConfig``, generates a directory tree containing:
    - ``src/server.ts`` HTTP entry point
    - ``src/router/`` exact-match route table and router
    - ``src/middlewares/index.ts`` sequential ``next``-style chain
    - ``src/controllers/hello.ts`` sample handler for ``GET /``
    - ``package.json``, ``.swcrc`` and optionally ``vercel.json``
    - a git repository when requested
    """

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.renderer = TemplateRenderer()
        self.manifest_gen = ManifestGenerator()
        self.written_files: list[Path] = []

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path) -> Path:
        """Generate the project structure.

        Args:
            output_dir: Parent directory where the project folder will be
                created.  A subdirectory named after the project is created
                inside it.

        Returns:
            Path to the generated project root.

        Raises:
            ProjectExistsError: The project directory already exists.  Nothing
                is written in that case.
            DelegateError: `git init` failed after the files were written.
            ScaffoldError: Generation failed part-way.  Files written so far
                are left in place.
        """
        project_root = Path(output_dir) / self.config.name
        if project_root.exists():
            raise ProjectExistsError(self.config.name)

        try:
            await asyncio.to_thread(project_root.mkdir, parents=True)
        except FileExistsError as exc:
            raise ProjectExistsError(self.config.name) from exc

        context = self._build_context()
        self.written_files = []

        try:
            # 1. Create the skeleton directory structure
            await self._create_directory_structure(project_root)

            # 2. Render source templates
            self.written_files.extend(
                await self.renderer.render_tree("src", project_root / "src", context)
            )

            # 3. Write package.json, .swcrc and optionally vercel.json
            configs = await self.manifest_gen.generate_all(
                project_root,
                self.config.name,
                self.config.version,
                description=self.config.description,
                vercel=self.config.vercel,
            )
            self.written_files.extend(configs.values())

            if self.config.git_init:
                self.written_files.append(
                    await self.renderer.render_to_file(
                        "gitignore.j2", project_root / ".gitignore", context
                    )
                )
        except OSError as exc:
            raise ScaffoldError(f"Failed to write project files: {exc}") from exc

        # 4. Initialise git (if requested)
        if self.config.git_init:
            await init_repository(project_root)

        return project_root

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project config."""
        return {
            "project_name": self.config.name,
            "version": self.config.version,
            "port": self.config.port,
        }

    # -- Directory structure -----------------------------------------------

    async def _create_directory_structure(self, root: Path) -> None:
        """Create the mandatory project directory tree."""

        async def _mkdir(d: str) -> None:
            await asyncio.to_thread((root / d).mkdir, parents=True, exist_ok=True)

        await asyncio.gather(*[_mkdir(d) for d in PROJECT_DIRECTORIES])
