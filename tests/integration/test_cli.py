"""Integration tests for CLI commands.

Runs the Typer application against a SQLite database file configured
through the PROJTRACK_DATABASE__URL environment variable.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from projtrack.main import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI runner."""
    return CliRunner()


@pytest.fixture
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Point the CLI at a temporary database and isolate config lookup."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("PROJTRACK_DATABASE__URL", url)
    monkeypatch.setenv("PROJTRACK_LOGGING__LEVEL", "WARNING")
    return url


@pytest.fixture
def initialized(cli_runner: CliRunner, database_url: str) -> None:
    result = cli_runner.invoke(app, ["init-db"])
    assert result.exit_code == 0, result.output


@pytest.mark.integration
class TestProjectCLI:
    """Integration tests for project CLI commands."""

    def test_init_db(self, cli_runner, database_url):
        result = cli_runner.invoke(app, ["init-db"])

        assert result.exit_code == 0
        assert "Database schema ready." in result.output

    def test_init_db_reset_drops_projects(self, cli_runner, initialized):
        cli_runner.invoke(app, ["project", "add", "Bookshelf"])

        result = cli_runner.invoke(app, ["init-db", "--reset"])
        listing = cli_runner.invoke(app, ["project", "list"])

        assert result.exit_code == 0
        assert "No projects found" in listing.output

    def test_add_and_show(self, cli_runner, initialized):
        result = cli_runner.invoke(
            app,
            ["project", "add", "Bookshelf", "-e", "3.5", "-a", "4", "-d", "3", "-n", "Pine"],
        )

        assert result.exit_code == 0, result.output
        assert "Project Added" in result.output
        assert "3.50" in result.output

        shown = cli_runner.invoke(app, ["project", "show", "1"])
        assert shown.exit_code == 0, shown.output
        assert "Bookshelf" in shown.output
        assert "4.00" in shown.output
        assert "Pine" in shown.output

    def test_add_invalid_hours(self, cli_runner, initialized):
        result = cli_runner.invoke(app, ["project", "add", "Bookshelf", "-e", "lots"])

        assert result.exit_code == 1
        assert "lots is not a valid number." in result.output

    def test_list_in_id_order(self, cli_runner, initialized):
        cli_runner.invoke(app, ["project", "add", "Zeta"])
        cli_runner.invoke(app, ["project", "add", "Alpha"])

        result = cli_runner.invoke(app, ["project", "list"])

        assert result.exit_code == 0
        assert result.output.index("1: Zeta") < result.output.index("2: Alpha")

    def test_list_empty(self, cli_runner, initialized):
        result = cli_runner.invoke(app, ["project", "list"])

        assert result.exit_code == 0
        assert "No projects found" in result.output

    def test_show_missing(self, cli_runner, initialized):
        result = cli_runner.invoke(app, ["project", "show", "7"])

        assert result.exit_code == 1
        assert "Project with ID=7 does not exist." in result.output

    def test_update_keeps_omitted_fields(self, cli_runner, initialized):
        cli_runner.invoke(app, ["project", "add", "Stool", "-e", "2", "-d", "1", "-n", "Oak"])

        result = cli_runner.invoke(app, ["project", "update", "1", "--name", "Step stool", "-d", "2"])

        assert result.exit_code == 0, result.output
        assert "Project Updated" in result.output
        assert "Step stool" in result.output
        assert "2.00" in result.output
        assert "Oak" in result.output

    def test_update_missing(self, cli_runner, initialized):
        result = cli_runner.invoke(app, ["project", "update", "99", "--name", "Ghost"])

        assert result.exit_code == 1
        assert "Project with ID=99 does not exist." in result.output

    def test_delete(self, cli_runner, initialized):
        cli_runner.invoke(app, ["project", "add", "Planter"])

        result = cli_runner.invoke(app, ["project", "delete", "1"])
        again = cli_runner.invoke(app, ["project", "delete", "1"])

        assert result.exit_code == 0
        assert "Project 1 was successfully deleted." in result.output
        assert again.exit_code == 1
        assert "does not exist" in again.output

    def test_menu_exits_on_blank_input(self, cli_runner, initialized):
        result = cli_runner.invoke(app, ["menu"], input="2\n\n")

        assert result.exit_code == 0, result.output
        assert "Projects:" in result.output
        assert "Exiting the menu..." in result.output

    def test_menu_exits_at_end_of_input(self, cli_runner, initialized):
        result = cli_runner.invoke(app, ["menu"], input="2\n")

        assert result.exit_code == 0, result.output
        assert "Exiting the menu..." in result.output
