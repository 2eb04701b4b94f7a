"""Main CLI entry point for projtrack.

This module provides the main Typer application with the project
sub-commands, schema initialization and the interactive menu.

Usage:
    projtrack init-db
    projtrack project add "Bookshelf" --estimated-hours 6 --difficulty 3
    projtrack project list
    projtrack menu
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console

from projtrack.cli import project as project_cli
from projtrack.cli.menu import ProjectMenu
from projtrack.config import ProjtrackConfig, load_config
from projtrack.database.connection import create_schema, drop_schema, get_engine
from projtrack.database.repository import ProjectRepository
from projtrack.exceptions import ProjtrackError
from projtrack.logging import setup_logging
from projtrack.service import ProjectService

T = TypeVar("T")

app = typer.Typer(
    name="projtrack",
    help="projtrack: DIY project tracker",
    no_args_is_help=True,
)

app.add_typer(project_cli.app, name="project", help="Manage projects")

console = Console()


class AppContext:
    """Application context shared across CLI commands.

    Attributes:
        config: Loaded projtrack configuration
        engine: Async SQLAlchemy engine
        repository: Project aggregate repository bound to the engine
        service: Project service bound to the repository
    """

    def __init__(self, config: ProjtrackConfig):
        self.config = config
        self.engine = get_engine(config.database)
        self.repository = ProjectRepository(self.engine)
        self.service = ProjectService(self.repository)


_app_context: AppContext | None = None


def get_app_context() -> AppContext:
    """Get the shared application context.

    Raises:
        RuntimeError: If context has not been initialized
    """
    if _app_context is None:
        raise RuntimeError("Application context not initialized. Call initialize_context first.")
    return _app_context


def initialize_context(config: ProjtrackConfig) -> AppContext:
    """Initialize the global application context."""
    global _app_context
    _app_context = AppContext(config)
    return _app_context


def run_with_service(work: Callable[[ProjectService], Awaitable[T]]) -> T:
    """Run one coroutine against the project service on a fresh event loop.

    The engine's pool is disposed afterwards so no connection outlives the
    loop it was opened on.
    """
    ctx = get_app_context()

    async def _run() -> T:
        try:
            return await work(ctx.service)
        finally:
            await ctx.engine.dispose()

    return asyncio.run(_run())


@app.command("init-db")
def init_db(
    reset: Annotated[
        bool,
        typer.Option("--reset", help="Drop existing project tables first"),
    ] = False,
) -> None:
    """Create the project, material, step and category tables."""
    ctx = get_app_context()

    async def _init() -> None:
        try:
            if reset:
                await drop_schema(ctx.engine)
            await create_schema(ctx.engine)
        finally:
            await ctx.engine.dispose()

    try:
        asyncio.run(_init())
    except Exception as e:
        console.print(f"[red]Error creating schema:[/red] {e}")
        raise typer.Exit(code=1)

    console.print("[green]Database schema ready.[/green]")


@app.command()
def menu() -> None:
    """Run the interactive project menu."""

    async def _menu(service: ProjectService) -> None:
        await ProjectMenu(service, console).run()

    try:
        run_with_service(_menu)
    except ProjtrackError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)


@app.callback()
def main_callback(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (TOML format)",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options and initialize application context."""
    try:
        config = load_config(config_path)
    except Exception as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(code=1)

    if verbose:
        config.logging.level = "DEBUG"
    setup_logging(config.logging)

    try:
        initialize_context(config)
    except Exception as e:
        console.print(f"[red]Error initializing application:[/red] {e}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
