"""Unit tests for goscript CLI module."""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from goscript.cli import cli


@pytest.fixture
def config_file(tree: Path) -> Path:
    """Write a config file describing the fake tree."""
    path = tree / ".go-script.yaml"
    path.write_text(yaml.safe_dump({"project": {"core_dir": str(tree.parent / "core")}}))
    return path


@pytest.fixture
def run(config_file: Path):
    """Invoke the CLI against the fake tree with a fixed terminal width."""
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(
            cli,
            ["--config", str(config_file), *args],
            env={
                "COLUMNS": "80",
                "_GO_CMD": "./go",
                "_GO_ROOTDIR": None,
                "_GO_SCRIPTS_DIR": None,
                "_GO_CORE_DIR": None,
                "_GO_PLUGINS_DIR": None,
            },
        )

    return _run


class TestCliGroup:
    """Tests for main CLI group."""

    def test_cli_help(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "command-dispatch framework" in result.output
        for name in ["commands", "complete", "help", "modules", "plugins"]:
            assert name in result.output

    def test_cli_version(self) -> None:
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "goscript" in result.output.lower()

    def test_invalid_config(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("logging:\n  level: loud\n")
        result = CliRunner().invoke(cli, ["--config", str(bad), "commands"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stderr


class TestModulesCommand:
    """Tests for the modules command."""

    def test_by_class(self, run) -> None:
        result = run("modules")
        assert result.exit_code == 0
        assert result.stdout.startswith("From the core framework library:\n  format\n  log\n")

    def test_summaries(self, run) -> None:
        result = run("modules", "--summaries", "fiz/")
        assert result.exit_code == 0
        assert result.stdout == "fiz/fizzy  fizzy - library from fiz\n"

    def test_dash_help_is_an_argument(self, run) -> None:
        result = run("modules", "-help", "project-lib")
        assert result.exit_code == 0
        assert result.stdout == "project-lib - helpers for this project\n"

    def test_unknown_module(self, run) -> None:
        result = run("modules", "missing")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Unknown module: missing" in result.stderr

    def test_double_dash_is_an_unknown_flag(self, run) -> None:
        result = run("modules", "--")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "Unknown flag: --" in result.stderr

    def test_wildcard_with_other_spec(self, run) -> None:
        result = run("modules", "*", "extra")
        assert result.exit_code == 1
        assert result.stdout == ""


class TestCommandsAndPlugins:
    """Tests for the commands and plugins commands."""

    def test_commands(self, run) -> None:
        result = run("commands")
        assert result.exit_code == 0
        assert result.stdout.split() == ["bar-cmd", "build", "deploy", "env", "foo-cmd"]

    def test_subcommand_paths(self, run) -> None:
        result = run("commands", "--paths", "deploy")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "deploy prod     scripts/deploy.d/prod",
            "deploy staging  scripts/deploy.d/staging",
        ]

    def test_commands_without_subcommands(self, run) -> None:
        result = run("commands", "build")
        assert result.exit_code == 1
        assert "no subcommands" in result.stderr

    def test_plugins(self, run) -> None:
        result = run("plugins")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["bar-cmd", "foo-cmd"]


class TestHelpCommand:
    """Tests for the help command."""

    def test_overview(self, run) -> None:
        result = run("help")
        assert result.exit_code == 0
        assert result.stdout.startswith("Usage: ./go <command> [arguments...]")
        assert "  deploy    deploy - ship the project" in result.stdout
        assert "modules" in result.stdout

    def test_script_help(self, run) -> None:
        result = run("help", "build")
        assert result.exit_code == 0
        assert result.stdout == "build - compile the project\n\nUsage: ./go build\n"

    def test_builtin_help(self, run) -> None:
        result = run("help", "commands")
        assert result.exit_code == 0
        assert "--summaries" in result.stdout

    def test_unknown_command(self, run) -> None:
        result = run("help", "missing")
        assert result.exit_code == 1
        assert "Unknown command: missing" in result.stderr


class TestCompleteCommand:
    """Tests for the complete command."""

    @pytest.mark.smoke
    def test_modules_first_word(self, run) -> None:
        result = run("complete", "1", "modules", "")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "--help",
            "--paths",
            "--summaries",
            "--imported",
            "format",
            "log",
            "project-lib",
            "bar/",
            "fiz/",
            "foo/",
        ]

    def test_flags_pass_through(self, run) -> None:
        result = run("complete", "2", "modules", "--help", "pro")
        assert result.exit_code == 0
        assert result.stdout == "project-lib\n"

    def test_failure_is_silent(self, run) -> None:
        result = run("complete", "2", "modules", "--imported", "")
        assert result.exit_code == 1
        assert result.stdout == ""

    def test_double_dash_is_the_current_word(self, run) -> None:
        result = run("complete", "1", "modules", "--")
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["--help", "--paths", "--summaries", "--imported"]

    def test_double_dash_keeps_word_positions(self, run) -> None:
        result = run("complete", "2", "modules", "--", "pro")
        assert result.exit_code == 1
        assert result.stdout == ""
