"""SwiftTS command-line interface.

Creates projects and forwards day-to-day commands to the package manager.

Usage::

    swiftts new my-service
    swiftts add express
    swiftts add jest --dev
    swiftts build
    swiftts dev

Subcommands are resolved through a command table built by
:func:`build_command_table` and handed to :func:`dispatch`.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from pydantic import ValidationError
from rich.prompt import Confirm, Prompt

from swiftts import __version__
from swiftts.config import Config
from swiftts.errors import InvalidProjectNameError, ProjectExistsError, SwiftTSError
from swiftts.package_manager import CommandResult, PackageManager
from swiftts.scaffolder import ManifestGenerator, ProjectConfig, ProjectGenerator
from swiftts.utils import (
    console,
    is_valid_project_name,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
)

CommandHandler = Callable[[argparse.Namespace, Config], Awaitable[int]]

NAME_RULES = "The project name may only contain letters, digits, hyphens and underscores."


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def prompt_project_name(initial: str | None = None) -> str:
    """Return a valid project name, prompting until one is entered.

    *initial* is used as-is when valid; otherwise the reason is printed and
    the user is asked again.
    """
    if initial:
        if is_valid_project_name(initial):
            return initial
        print_error(str(InvalidProjectNameError(initial)))

    while True:
        name = Prompt.ask("Project name", console=console).strip()
        if is_valid_project_name(name):
            return name
        print_error(NAME_RULES)


def prompt_git_init() -> bool:
    return Confirm.ask("Initialise a git repository?", default=False, console=console)


# ---------------------------------------------------------------------------
# Delegate helpers
# ---------------------------------------------------------------------------


def _package_manager(config: Config) -> PackageManager:
    return PackageManager(
        executable=config.delegate.package_manager,
        cwd=Path.cwd(),
        timeout=config.delegate.timeout,
    )


def _require_manifest(pm: PackageManager) -> bool:
    if (pm.cwd / "package.json").exists():
        return True
    print_error(
        f"No package.json found in {pm.cwd}. "
        "Run this command from inside a SwiftTS project."
    )
    return False


def report_result(result: CommandResult, success_message: str) -> int:
    """Print the outcome of a delegated command and return an exit code.

    A non-zero return code is passed through (timeouts map to 1).  Output on
    stderr from a successful command is shown as a warning only.
    """
    if not result.ok:
        print_error(f"`{result.command_line}` failed (exit {result.returncode})")
        if result.stderr:
            print_error(result.stderr)
        if result.stdout:
            console.print(result.stdout, markup=False, highlight=False)
        return result.returncode if result.returncode > 0 else 1

    if result.stderr:
        print_warning(result.stderr)
    if result.stdout:
        console.print(result.stdout, markup=False, highlight=False)
    print_success(success_message)
    return 0


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def cmd_new(args: argparse.Namespace, config: Config) -> int:
    """``swiftts new [name]`` -- scaffold a project in the output directory."""
    output_dir = Path(args.output) if args.output else config.output_dir
    name = prompt_project_name(args.name)

    # Collision is checked before asking anything else or touching the disk.
    if (output_dir / name).exists():
        print_error(f"Directory '{name}' already exists.")
        return 1

    git_init = args.git if args.git is not None else prompt_git_init()

    project = ProjectConfig(
        name=name,
        description=args.description,
        version=config.scaffold.version,
        port=config.scaffold.port,
        git_init=git_init,
        vercel=args.vercel,
    )
    generator = ProjectGenerator(project)
    try:
        project_root = await generator.generate(output_dir)
    except ProjectExistsError as exc:
        print_error(str(exc))
        return 1
    except (SwiftTSError, OSError) as exc:
        print_error(f"Error creating project: {exc}")
        return 1

    if git_init:
        print_info("Git repository initialised.")

    print_summary_table(
        {
            path.relative_to(project_root).as_posix(): f"{path.stat().st_size} bytes"
            for path in generator.written_files
        },
        title=f"Files in {name}",
    )
    print_success(f'Project "{name}" created successfully.')
    console.print("\nNext steps:\n")
    console.print(f"  1. cd {name}", markup=False)
    console.print("  2. npm install", markup=False)
    console.print("  3. npm run dev\n", markup=False)
    return 0


async def cmd_add(args: argparse.Namespace, config: Config) -> int:
    """``swiftts add <module> [--dev]``."""
    pm = _package_manager(config)
    if not _require_manifest(pm):
        return 1
    print_info(f"Adding module {args.module} to project at {pm.cwd}...")
    result = await pm.install(args.module, dev=args.dev)
    return report_result(result, f"Module {args.module} added.")


async def cmd_remove(args: argparse.Namespace, config: Config) -> int:
    """``swiftts remove <module> [--dev]``."""
    pm = _package_manager(config)
    if not _require_manifest(pm):
        return 1
    print_info(f"Removing module {args.module} from project at {pm.cwd}...")
    result = await pm.uninstall(args.module, dev=args.dev)
    return report_result(result, f"Module {args.module} removed.")


async def cmd_build(args: argparse.Namespace, config: Config) -> int:
    pm = _package_manager(config)
    if not _require_manifest(pm):
        return 1
    return report_result(await pm.run_script("build"), "Build finished.")


async def cmd_start(args: argparse.Namespace, config: Config) -> int:
    pm = _package_manager(config)
    if not _require_manifest(pm):
        return 1
    return report_result(await pm.start(), "Server stopped.")


async def cmd_test(args: argparse.Namespace, config: Config) -> int:
    pm = _package_manager(config)
    if not _require_manifest(pm):
        return 1
    return report_result(await pm.test(), "Tests passed.")


async def cmd_dev(args: argparse.Namespace, config: Config) -> int:
    """``swiftts dev`` -- rebuild and restart on every change under ``src/``."""
    pm = _package_manager(config)
    if not _require_manifest(pm):
        return 1
    return report_result(await pm.run_script("dev", stream=True), "Dev server stopped.")


async def cmd_vercel(args: argparse.Namespace, config: Config) -> int:
    """``swiftts vercel`` -- write ``vercel.json`` if missing, then deploy."""
    pm = _package_manager(config)
    if not _require_manifest(pm):
        return 1
    if not (pm.cwd / "vercel.json").exists():
        await ManifestGenerator().generate_vercel_config(pm.cwd)
        print_info("Wrote vercel.json")
    return report_result(await pm.run_script("vercel", stream=True), "Deployment finished.")


# ---------------------------------------------------------------------------
# Command table & parser
# ---------------------------------------------------------------------------


def build_command_table() -> dict[str, CommandHandler]:
    """Map each subcommand name to its handler."""
    return {
        "new": cmd_new,
        "add": cmd_add,
        "remove": cmd_remove,
        "build": cmd_build,
        "start": cmd_start,
        "test": cmd_test,
        "dev": cmd_dev,
        "vercel": cmd_vercel,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swiftts",
        description="SwiftTS -- generate and manage TypeScript HTTP service projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  swiftts new my-service\n"
            "  swiftts new my-service --git --vercel\n"
            "  swiftts add express\n"
            "  swiftts remove jest --dev\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"SwiftTS version {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- swiftts new ------------------------------------------------------
    new_parser = subparsers.add_parser("new", help="Create a new project")
    new_parser.add_argument("name", nargs="?", default=None, help="Project directory name")
    new_parser.add_argument(
        "--git",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Initialise a git repository (prompted when omitted)",
    )
    new_parser.add_argument(
        "--description",
        default="",
        help="package.json description",
    )
    new_parser.add_argument(
        "--vercel",
        action="store_true",
        help="Also write a vercel.json deployment descriptor",
    )
    new_parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )

    # -- swiftts add / remove ----------------------------------------------
    add_parser = subparsers.add_parser("add", help="Install a dependency")
    add_parser.add_argument("module", help="Package to install")
    add_parser.add_argument("-D", "--dev", action="store_true", help="Install as a dev dependency")

    remove_parser = subparsers.add_parser("remove", help="Uninstall a dependency")
    remove_parser.add_argument("module", help="Package to uninstall")
    remove_parser.add_argument("-D", "--dev", action="store_true", help="Remove from dev dependencies")

    # -- package scripts ---------------------------------------------------
    subparsers.add_parser("build", help="Compile src/ to dist/")
    subparsers.add_parser("start", help="Run the compiled server")
    subparsers.add_parser("test", help="Run the test suite")
    subparsers.add_parser("dev", help="Rebuild and restart on source changes")
    subparsers.add_parser("vercel", help="Deploy to Vercel")

    return parser


async def dispatch(
    commands: dict[str, CommandHandler],
    args: argparse.Namespace,
    config: Config,
) -> int:
    """Run the handler registered for ``args.command`` and return its exit code."""
    handler = commands.get(args.command)
    if handler is None:
        print_error(f"Unknown command: {args.command}")
        return 2
    return await handler(args, config)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``swiftts`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        config = Config.from_env()
    except (ValueError, ValidationError) as exc:
        print_error(f"Invalid SWIFTTS_* setting: {exc}")
        sys.exit(1)
    commands = build_command_table()

    try:
        exit_code = asyncio.run(dispatch(commands, args, config))
    except (KeyboardInterrupt, EOFError):
        print_warning("Aborted.")
        exit_code = 130

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
