"""Tests for CLI commands."""

from typer.testing import CliRunner

from todolist.cli import app

runner = CliRunner()


def test_version_command() -> None:
    """Test version command outputs version info."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "todolist version" in result.stdout


def test_serve_help() -> None:
    """Test serve command help."""
    result = runner.invoke(app, ["serve", "--help"])

    assert result.exit_code == 0
    assert "--host" in result.stdout
    assert "--port" in result.stdout
    assert "--reload" in result.stdout


def test_lists_help() -> None:
    """Test lists subcommand help."""
    result = runner.invoke(app, ["lists", "--help"])

    assert result.exit_code == 0
    assert "show" in result.stdout
    assert "items" in result.stdout


def test_lists_items_requires_name() -> None:
    """Test that lists items requires a list name argument."""
    result = runner.invoke(app, ["lists", "items"])

    assert result.exit_code != 0
