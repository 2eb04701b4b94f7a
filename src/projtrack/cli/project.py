"""Project management CLI commands.

This module provides CLI commands for adding, listing, showing, updating
and deleting projects.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from projtrack.cli.inputs import parse_decimal, parse_text
from projtrack.entities import Project
from projtrack.exceptions import ProjtrackError
from projtrack.service import ProjectService

app = typer.Typer(help="Project management commands")
console = Console()


def project_summary(project: Project) -> str:
    """One-line "id: name" rendering used by listings."""
    return f"{project.project_id}: {project.project_name}"


def project_panel(project: Project, title: str = "Project") -> Panel:
    """Render a project aggregate with its materials, steps and categories."""
    details = (
        f"[bold]ID:[/bold] {project.project_id}\n"
        f"[bold]Name:[/bold] {project.project_name}\n"
        f"[bold]Estimated hours:[/bold] {_show(project.estimated_hours)}\n"
        f"[bold]Actual hours:[/bold] {_show(project.actual_hours)}\n"
        f"[bold]Difficulty:[/bold] {_show(project.difficulty)}\n"
        f"[bold]Notes:[/bold] {_show(project.notes)}"
    )
    parts: list = [details]

    if project.materials:
        materials = Table(title="Materials", title_justify="left")
        materials.add_column("ID", style="cyan")
        materials.add_column("Name", style="bold")
        materials.add_column("Required", justify="right")
        materials.add_column("Cost", justify="right")
        for m in project.materials:
            materials.add_row(
                str(m.material_id), m.material_name or "", _show(m.num_required), _show(m.cost)
            )
        parts.append(materials)

    if project.steps:
        steps = Table(title="Steps", title_justify="left")
        steps.add_column("#", style="cyan", justify="right")
        steps.add_column("Instruction")
        for s in project.steps:
            steps.add_row(_show(s.step_order), s.step_text or "")
        parts.append(steps)

    if project.categories:
        names = ", ".join(c.category_name or "" for c in project.categories)
        parts.append(f"[bold]Categories:[/bold] {names}")

    return Panel(Group(*parts), title=title, border_style="green")


def _show(value: object) -> str:
    return "-" if value is None else str(value)


def _fail(error: ProjtrackError) -> None:
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(code=1)


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Project name")],
    estimated_hours: Annotated[
        Optional[str],
        typer.Option("--estimated-hours", "-e", help="Estimated hours, e.g. 3.5"),
    ] = None,
    actual_hours: Annotated[
        Optional[str],
        typer.Option("--actual-hours", "-a", help="Actual hours, e.g. 4.25"),
    ] = None,
    difficulty: Annotated[
        Optional[int],
        typer.Option("--difficulty", "-d", help="Difficulty (1-5)"),
    ] = None,
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", "-n", help="Free-text notes"),
    ] = None,
) -> None:
    """Add a new project."""
    from projtrack.main import run_with_service

    try:
        project = Project(
            project_name=parse_text(name),
            estimated_hours=parse_decimal(estimated_hours),
            actual_hours=parse_decimal(actual_hours),
            difficulty=difficulty,
            notes=parse_text(notes),
        )

        async def _add(service: ProjectService) -> Project:
            return await service.add(project)

        created = run_with_service(_add)
    except ProjtrackError as e:
        _fail(e)

    console.print(project_panel(created, title="Project Added"))


@app.command(name="list")
def list_() -> None:
    """List all projects in id order."""
    from projtrack.main import run_with_service

    async def _list(service: ProjectService) -> list[Project]:
        return await service.list()

    try:
        projects = run_with_service(_list)
    except ProjtrackError as e:
        _fail(e)

    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return

    console.print("Projects:")
    for p in projects:
        console.print(f"   {project_summary(p)}", highlight=False)


@app.command()
def show(
    project_id: Annotated[int, typer.Argument(help="Project ID")],
) -> None:
    """Show a project with its materials, steps and categories."""
    from projtrack.main import run_with_service

    async def _show_project(service: ProjectService) -> Project:
        return await service.get_by_id(project_id)

    try:
        project = run_with_service(_show_project)
    except ProjtrackError as e:
        _fail(e)

    console.print(project_panel(project))


@app.command()
def update(
    project_id: Annotated[int, typer.Argument(help="Project ID")],
    name: Annotated[
        Optional[str],
        typer.Option("--name", help="New project name"),
    ] = None,
    estimated_hours: Annotated[
        Optional[str],
        typer.Option("--estimated-hours", "-e", help="New estimated hours"),
    ] = None,
    actual_hours: Annotated[
        Optional[str],
        typer.Option("--actual-hours", "-a", help="New actual hours"),
    ] = None,
    difficulty: Annotated[
        Optional[int],
        typer.Option("--difficulty", "-d", help="New difficulty (1-5)"),
    ] = None,
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", "-n", help="New notes"),
    ] = None,
) -> None:
    """Update project details; omitted options keep their current value."""
    from projtrack.main import run_with_service

    try:
        changes = Project(
            project_id=project_id,
            project_name=parse_text(name),
            estimated_hours=parse_decimal(estimated_hours),
            actual_hours=parse_decimal(actual_hours),
            difficulty=difficulty,
            notes=parse_text(notes),
        )

        async def _update(service: ProjectService) -> Project:
            current = await service.get_by_id(project_id)
            await service.update(merge_changes(current, changes))
            return await service.get_by_id(project_id)

        project = run_with_service(_update)
    except ProjtrackError as e:
        _fail(e)

    console.print(project_panel(project, title="Project Updated"))


@app.command()
def delete(
    project_id: Annotated[int, typer.Argument(help="Project ID")],
) -> None:
    """Delete a project together with its materials and steps."""
    from projtrack.main import run_with_service

    async def _delete(service: ProjectService) -> None:
        await service.delete(project_id)

    try:
        run_with_service(_delete)
    except ProjtrackError as e:
        _fail(e)

    console.print(f"[green]Project {project_id} was successfully deleted.[/green]")


def merge_changes(current: Project, changes: Project) -> Project:
    """Overlay the non-None scalar fields of changes onto current."""

    def pick(new, old):
        return old if new is None else new

    return Project(
        project_id=current.project_id,
        project_name=pick(changes.project_name, current.project_name),
        estimated_hours=pick(changes.estimated_hours, current.estimated_hours),
        actual_hours=pick(changes.actual_hours, current.actual_hours),
        difficulty=pick(changes.difficulty, current.difficulty),
        notes=pick(changes.notes, current.notes),
    )
