"""Jinja2 rendering of the TypeScript sources shipped with SwiftTS.

The ``.j2`` files under ``swiftts/scaffolder/templates/`` mirror the layout
of a generated project: ``src/router/router.ts.j2`` becomes
``<project>/src/router/router.ts``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders project templates with a ``project_name``/``version``/``port`` context.

    A template referencing a variable missing from the context raises
    ``jinja2.UndefinedError`` instead of emitting an empty string into the
    generated TypeScript.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir or _DEFAULT_TEMPLATE_DIR)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the template root) to a string."""
        return self.env.get_template(template_path).render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template into *output_path*, creating parent directories."""
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render every ``*.j2`` file below *template_prefix* into *output_dir*.

        Relative paths are kept and the ``.j2`` suffix is dropped.  Files are
        written in sorted order and the written paths are returned.  A prefix
        that does not exist renders nothing.
        """
        prefix_path = self.template_dir / template_prefix
        if not prefix_path.is_dir():
            return []

        out_base = Path(output_dir)
        written: list[Path] = []
        for template_file in sorted(prefix_path.rglob("*.j2")):
            rel = template_file.relative_to(prefix_path).as_posix()
            written.append(
                await self.render_to_file(
                    f"{template_prefix}/{rel}",
                    out_base / rel.removesuffix(".j2"),
                    context,
                )
            )
        return written


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
