"""Package manifest, build-tool and deployment config generation.

Produces ``package.json``, ``.swcrc`` and (optionally) ``vercel.json`` for a
generated project.  All three are plain JSON documents built from Python
dicts, so no Jinja2 templates are involved.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from swiftts.utils import save_json

DEV_DEPENDENCIES: dict[str, str] = {
    "@swc/cli": "^0.1.65",
    "@swc/core": "^1.7.36",
    "jest": "^27.5.1",
    "nodemon": "^3.1.7",
    "typescript": "^4.4.4",
}

ENTRY_POINT = "dist/server.js"


def build_package_manifest(
    name: str, version: str = "1.0.0", description: str = ""
) -> dict[str, Any]:
    """Return the ``package.json`` document for project *name*."""
    return {
        "name": name.lower(),
        "version": version,
        "description": description,
        "main": ENTRY_POINT,
        "scripts": {
            "vercel": "vercel --prod",
            "build": "swc src -d dist",
            "start": f"node {ENTRY_POINT}",
            "dev": 'nodemon --watch src --ext ts --exec "npm run build && npm start"',
            "test": "jest",
        },
        "dependencies": {},
        "devDependencies": dict(DEV_DEPENDENCIES),
    }


def build_swc_config() -> dict[str, Any]:
    """Return the ``.swcrc`` document (TypeScript -> CommonJS, ES2019)."""
    return {
        "jsc": {
            "parser": {
                "syntax": "typescript",
                "tsx": True,
                "decorators": True,
            },
            "target": "es2019",
        },
        "module": {
            "type": "commonjs",
        },
    }


def build_vercel_config() -> dict[str, Any]:
    """Return the ``vercel.json`` document routing every path to the server."""
    return {
        "version": 2,
        "builds": [
            {"src": ENTRY_POINT, "use": "@vercel/node"},
        ],
        "routes": [
            {"src": "/(.*)", "dest": ENTRY_POINT},
        ],
    }


class ManifestGenerator:
    """Writes the JSON configuration files of a generated project."""

    _FILES: dict[str, str] = {
        "manifest": "package.json",
        "swc": ".swcrc",
        "vercel": "vercel.json",
    }

    async def generate_manifest(
        self,
        project_root: Path,
        name: str,
        version: str = "1.0.0",
        description: str = "",
    ) -> Path:
        """Write ``package.json`` to *project_root*."""
        return await save_json(
            build_package_manifest(name, version, description),
            project_root / self._FILES["manifest"],
        )

    async def generate_swc_config(self, project_root: Path) -> Path:
        """Write ``.swcrc`` to *project_root*."""
        return await save_json(build_swc_config(), project_root / self._FILES["swc"])

    async def generate_vercel_config(self, project_root: Path) -> Path:
        """Write ``vercel.json`` to *project_root*."""
        return await save_json(
            build_vercel_config(), project_root / self._FILES["vercel"]
        )

    async def generate_all(
        self,
        project_root: Path,
        name: str,
        version: str = "1.0.0",
        *,
        description: str = "",
        vercel: bool = False,
    ) -> dict[str, Path]:
        """Write every config file and return ``{label: path}``.

        ``vercel.json`` is only written when *vercel* is true.
        """
        result: dict[str, Path] = {
            "swc": await self.generate_swc_config(project_root),
            "manifest": await self.generate_manifest(
                project_root, name, version, description
            ),
        }
        if vercel:
            result["vercel"] = await self.generate_vercel_config(project_root)
        return result
