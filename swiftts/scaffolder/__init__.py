"""SwiftTS scaffolder -- generates new TypeScript HTTP service projects.

Quick usage::

    from swiftts.scaffolder import ProjectConfig, ProjectGenerator

    config = ProjectConfig(name="demo", git_init=False)
    generator = ProjectGenerator(config)
    project_path = await generator.generate(Path.cwd())
"""

from swiftts.scaffolder.generator import PROJECT_DIRECTORIES, ProjectConfig, ProjectGenerator
from swiftts.scaffolder.manifest_gen import ManifestGenerator
from swiftts.scaffolder.templates import TemplateRenderer
from swiftts.scaffolder.vcs import init_repository

__all__ = [
    "PROJECT_DIRECTORIES",
    "ManifestGenerator",
    "ProjectConfig",
    "ProjectGenerator",
    "TemplateRenderer",
    "init_repository",
]
