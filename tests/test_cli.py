"""Tests for the swiftts command-line interface.

Covers:
- Help / version / no-argument behaviour
- ``new``: prompts, validation, collision, git choice, vercel flag
- Delegate commands: argument mapping, exit codes, missing package.json
- The explicit command table and dispatcher
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from swiftts import __version__
from swiftts.cli import (
    build_command_table,
    build_parser,
    dispatch,
    main,
    prompt_project_name,
    report_result,
)
from swiftts.config import Config
from swiftts.package_manager import CommandResult

pytestmark = pytest.mark.unit


def _run_main(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


@pytest.fixture
def mock_git():
    mock_init = AsyncMock(return_value="Initialized empty Git repository")
    with patch("swiftts.scaffolder.generator.init_repository", mock_init):
        yield mock_init


# ---------------------------------------------------------------------------
# Top-level behaviour
# ---------------------------------------------------------------------------


class TestTopLevel:
    def test_no_args_prints_help(self, capsys):
        assert _run_main([]) == 0
        assert "usage: swiftts" in capsys.readouterr().out

    def test_version(self, capsys):
        assert _run_main(["--version"]) == 0
        assert f"SwiftTS version {__version__}" in capsys.readouterr().out

    def test_unknown_subcommand_is_usage_error(self):
        assert _run_main(["frobnicate"]) == 2

    def test_command_table_covers_every_subcommand(self):
        table = build_command_table()
        assert set(table) == {"new", "add", "remove", "build", "start", "test", "dev", "vercel"}

    def test_each_call_builds_a_fresh_table(self):
        assert build_command_table() is not build_command_table()

    async def test_dispatch_uses_given_table(self):
        handler = AsyncMock(return_value=7)
        args = argparse.Namespace(command="custom")
        assert await dispatch({"custom": handler}, args, Config()) == 7
        handler.assert_awaited_once()

    async def test_dispatch_unknown_command(self):
        args = argparse.Namespace(command="missing")
        assert await dispatch({}, args, Config()) == 2

    def test_parser_add_dev_flags(self):
        parser = build_parser()
        assert parser.parse_args(["add", "jest", "-D"]).dev is True
        assert parser.parse_args(["add", "jest", "--dev"]).dev is True
        assert parser.parse_args(["remove", "jest"]).dev is False

    def test_parser_git_tristate(self):
        parser = build_parser()
        assert parser.parse_args(["new", "x"]).git is None
        assert parser.parse_args(["new", "x", "--git"]).git is True
        assert parser.parse_args(["new", "x", "--no-git"]).git is False

    def test_keyboard_interrupt(self, output_dir: Path):
        with patch("swiftts.cli.Prompt.ask", side_effect=KeyboardInterrupt):
            assert _run_main(["new", "--output", str(output_dir)]) == 130
        assert list(output_dir.iterdir()) == []


class TestInvalidEnvironment:
    @pytest.mark.parametrize(
        "name, value",
        [
            ("SWIFTTS_PORT", "abc"),
            ("SWIFTTS_PORT", "99999"),
            ("SWIFTTS_TIMEOUT", "soon"),
            ("SWIFTTS_TIMEOUT", "0"),
        ],
    )
    def test_bad_setting_exits_1(self, npm_project, monkeypatch, capsys, name, value):
        monkeypatch.setenv(name, value)
        with patch("swiftts.cli.PackageManager") as pm_cls:
            assert _run_main(["build"]) == 1
        pm_cls.assert_not_called()
        assert "Invalid SWIFTTS_* setting" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# swiftts new
# ---------------------------------------------------------------------------


class TestNew:
    def test_creates_project(self, output_dir: Path, capsys):
        code = _run_main(["new", "demo", "--no-git", "--output", str(output_dir)])

        assert code == 0
        root = output_dir / "demo"
        for d in ("src", "src/controllers", "src/middlewares", "src/router"):
            assert (root / d).is_dir()
        assert (root / "package.json").is_file()
        assert (root / ".swcrc").is_file()
        assert not (root / ".git").exists()

        out = capsys.readouterr().out
        assert 'Project "demo" created successfully.' in out
        assert "cd demo" in out
        assert "npm run dev" in out

    def test_prompts_for_git_default_no(self, output_dir: Path, mock_git):
        with patch("swiftts.cli.Confirm.ask", return_value=False) as confirm:
            assert _run_main(["new", "demo", "--output", str(output_dir)]) == 0
        confirm.assert_called_once()
        assert confirm.call_args.kwargs["default"] is False
        mock_git.assert_not_awaited()

    def test_git_flag_initialises_repository(self, output_dir: Path, mock_git, capsys):
        with patch("swiftts.cli.Confirm.ask") as confirm:
            assert _run_main(["new", "demo", "--git", "--output", str(output_dir)]) == 0
        confirm.assert_not_called()
        mock_git.assert_awaited_once_with(output_dir / "demo")
        assert "Git repository initialised." in capsys.readouterr().out

    def test_vercel_flag(self, output_dir: Path):
        assert _run_main(["new", "demo", "--no-git", "--vercel", "-o", str(output_dir)]) == 0
        assert (output_dir / "demo" / "vercel.json").is_file()

    def test_description_flag(self, output_dir: Path):
        argv = ["new", "demo", "--no-git", "--description", "Orders API", "-o", str(output_dir)]
        assert _run_main(argv) == 0
        manifest = json.loads((output_dir / "demo" / "package.json").read_text(encoding="utf-8"))
        assert manifest["description"] == "Orders API"

    def test_collision_exits_1_without_prompting(self, output_dir: Path, capsys):
        (output_dir / "demo").mkdir()
        with patch("swiftts.cli.Confirm.ask") as confirm:
            assert _run_main(["new", "demo", "--output", str(output_dir)]) == 1
        confirm.assert_not_called()
        assert list((output_dir / "demo").iterdir()) == []
        assert "already exists" in capsys.readouterr().out

    def test_missing_name_is_prompted(self, output_dir: Path):
        with patch("swiftts.cli.Prompt.ask", return_value="prompted-app"):
            assert _run_main(["new", "--no-git", "--output", str(output_dir)]) == 0
        assert (output_dir / "prompted-app" / "package.json").is_file()

    def test_invalid_name_reprompts(self, output_dir: Path, capsys):
        with patch("swiftts.cli.Prompt.ask", side_effect=["still bad!", "good_name"]) as ask:
            assert _run_main(["new", "my project!", "--no-git", "--output", str(output_dir)]) == 0

        assert ask.call_count == 2
        assert [p.name for p in output_dir.iterdir()] == ["good_name"]
        out = capsys.readouterr().out
        assert "Invalid project name" in out

    def test_git_failure_exits_1(self, output_dir: Path, capsys):
        from swiftts.errors import DelegateError

        failing = AsyncMock(side_effect=DelegateError("git init failed (exit 128)", command="git init", returncode=128))
        with patch("swiftts.scaffolder.generator.init_repository", failing):
            assert _run_main(["new", "demo", "--git", "--output", str(output_dir)]) == 1
        assert "Error creating project" in capsys.readouterr().out

    def test_uses_configured_port(self, output_dir: Path, monkeypatch):
        monkeypatch.setenv("SWIFTTS_PORT", "7001")
        assert _run_main(["new", "demo", "--no-git", "--output", str(output_dir)]) == 0
        assert "7001" in (output_dir / "demo" / "src" / "server.ts").read_text(encoding="utf-8")

    def test_defaults_to_cwd(self, output_dir: Path, monkeypatch):
        monkeypatch.chdir(output_dir)
        monkeypatch.delenv("SWIFTTS_OUTPUT_DIR", raising=False)
        assert _run_main(["new", "here", "--no-git"]) == 0
        assert (output_dir / "here" / "package.json").is_file()


class TestPromptProjectName:
    def test_valid_initial_skips_prompt(self):
        with patch("swiftts.cli.Prompt.ask") as ask:
            assert prompt_project_name("my-project_1") == "my-project_1"
        ask.assert_not_called()

    def test_strips_whitespace(self):
        with patch("swiftts.cli.Prompt.ask", return_value="  spaced  "):
            assert prompt_project_name() == "spaced"

    def test_loops_until_valid(self):
        with patch("swiftts.cli.Prompt.ask", side_effect=["", "a b", "a.b", "ok"]) as ask:
            assert prompt_project_name() == "ok"
        assert ask.call_count == 4


# ---------------------------------------------------------------------------
# Delegate commands
# ---------------------------------------------------------------------------


def _result(cmd: list[str], returncode: int = 0, stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(command=cmd, returncode=returncode, stdout=stdout, stderr=stderr)


class TestDelegates:
    @pytest.mark.parametrize(
        "argv,method,call_args,call_kwargs",
        [
            (["add", "express"], "install", ("express",), {"dev": False}),
            (["add", "jest", "--dev"], "install", ("jest",), {"dev": True}),
            (["remove", "express"], "uninstall", ("express",), {"dev": False}),
            (["remove", "jest", "-D"], "uninstall", ("jest",), {"dev": True}),
            (["build"], "run_script", ("build",), {}),
            (["dev"], "run_script", ("dev",), {"stream": True}),
            (["start"], "start", (), {}),
            (["test"], "test", (), {}),
        ],
    )
    def test_maps_to_package_manager(self, npm_project, argv, method, call_args, call_kwargs):
        mock = AsyncMock(return_value=_result(["npm"], stdout="ok"))
        with patch(f"swiftts.cli.PackageManager.{method}", mock):
            assert _run_main(argv) == 0
        mock.assert_awaited_once_with(*call_args, **call_kwargs)

    def test_failure_propagates_return_code(self, npm_project, capsys):
        mock = AsyncMock(return_value=_result(["npm", "install", "nope"], 1, stderr="npm ERR! 404"))
        with patch("swiftts.cli.PackageManager.install", mock):
            assert _run_main(["add", "nope"]) == 1
        out = capsys.readouterr().out
        assert "npm ERR! 404" in out
        assert "failed (exit 1)" in out

    def test_timeout_maps_to_exit_1(self, npm_project):
        mock = AsyncMock(return_value=_result(["npm", "test"], -1, stderr="Command timed out"))
        with patch("swiftts.cli.PackageManager.test", mock):
            assert _run_main(["test"]) == 1

    def test_stderr_on_success_is_warning(self, npm_project, capsys):
        mock = AsyncMock(
            return_value=_result(["npm", "install", "x"], 0, stdout="added 1 package", stderr="npm WARN deprecated")
        )
        with patch("swiftts.cli.PackageManager.install", mock):
            assert _run_main(["add", "x"]) == 0
        out = capsys.readouterr().out
        assert "npm WARN deprecated" in out
        assert "added 1 package" in out
        assert "Module x added." in out

    def test_missing_manifest(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        mock = AsyncMock()
        with patch("swiftts.cli.PackageManager.run_script", mock):
            assert _run_main(["build"]) == 1
        mock.assert_not_awaited()
        assert "No package.json found" in capsys.readouterr().out

    def test_package_manager_from_env(self, npm_project, monkeypatch):
        monkeypatch.setenv("SWIFTTS_PACKAGE_MANAGER", "pnpm")
        mock_run = AsyncMock(return_value=(0, "", ""))
        with patch("swiftts.package_manager.run_command", mock_run):
            assert _run_main(["add", "zod"]) == 0
        assert mock_run.call_args.args[0] == ["pnpm", "install", "zod"]
        assert mock_run.call_args.kwargs["cwd"] == npm_project


class TestVercel:
    def test_writes_descriptor_then_deploys(self, npm_project):
        mock = AsyncMock(return_value=_result(["npm", "run", "vercel"]))
        with patch("swiftts.cli.PackageManager.run_script", mock):
            assert _run_main(["vercel"]) == 0
        mock.assert_awaited_once_with("vercel", stream=True)
        descriptor = json.loads((npm_project / "vercel.json").read_text(encoding="utf-8"))
        assert descriptor["routes"][0]["src"] == "/(.*)"

    def test_keeps_existing_descriptor(self, npm_project):
        (npm_project / "vercel.json").write_text('{"custom": true}', encoding="utf-8")
        mock = AsyncMock(return_value=_result(["npm", "run", "vercel"]))
        with patch("swiftts.cli.PackageManager.run_script", mock):
            assert _run_main(["vercel"]) == 0
        assert json.loads((npm_project / "vercel.json").read_text(encoding="utf-8")) == {"custom": True}


class TestReportResult:
    def test_success(self, capsys):
        assert report_result(_result(["npm", "test"], 0, stdout="[PASS] all"), "done") == 0
        out = capsys.readouterr().out
        assert "[PASS] all" in out
        assert "done" in out

    def test_nonzero_code_passed_through(self):
        assert report_result(_result(["npm", "test"], 3), "done") == 3

    def test_missing_executable(self):
        assert report_result(_result(["npm", "test"], 127, stderr="Command not found"), "done") == 127
