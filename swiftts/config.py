"""SwiftTS configuration.

Typed settings for the scaffolder and the package-manager wrapper.  All
settings are Pydantic v2 models so they are validated at construction time
and can be serialised to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


PROJECT_NAME_PATTERN = r"^[A-Za-z\-_\d]+$"


class ScaffoldDefaults(BaseModel):
    """Values baked into every generated project."""

    port: int = Field(default=3000, ge=1, le=65535, description="Port the generated server listens on")
    version: str = Field(default="1.0.0", description="Initial package.json version")


class DelegateConfig(BaseModel):
    """Settings for commands delegated to the external package manager."""

    package_manager: str = Field(default="npm", min_length=1)
    timeout: int = Field(default=300, ge=1, description="Per-command timeout in seconds")


class Config(BaseModel):
    """Global SwiftTS configuration.

    Created once by the CLI entry point and passed down to the generator and
    the package-manager wrapper.
    """

    output_dir: Path = Field(default_factory=Path.cwd)
    scaffold: ScaffoldDefaults = Field(default_factory=ScaffoldDefaults)
    delegate: DelegateConfig = Field(default_factory=DelegateConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SWIFTTS_OUTPUT_DIR, SWIFTTS_PORT,
            SWIFTTS_PACKAGE_MANAGER, SWIFTTS_TIMEOUT.
        """
        scaffold_kwargs: dict[str, Any] = {}
        if os.environ.get("SWIFTTS_PORT"):
            scaffold_kwargs["port"] = int(os.environ["SWIFTTS_PORT"])

        delegate_kwargs: dict[str, Any] = {}
        if os.environ.get("SWIFTTS_PACKAGE_MANAGER"):
            delegate_kwargs["package_manager"] = os.environ["SWIFTTS_PACKAGE_MANAGER"]
        if os.environ.get("SWIFTTS_TIMEOUT"):
            delegate_kwargs["timeout"] = int(os.environ["SWIFTTS_TIMEOUT"])

        kwargs: dict[str, Any] = {
            "scaffold": ScaffoldDefaults(**scaffold_kwargs),
            "delegate": DelegateConfig(**delegate_kwargs),
        }
        if os.environ.get("SWIFTTS_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SWIFTTS_OUTPUT_DIR"])

        return cls(**kwargs)
