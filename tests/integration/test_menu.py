"""Integration tests for the interactive project menu.

Drives ProjectMenu with scripted input lines and checks both the printed
output and the resulting database state.
"""

from __future__ import annotations

from decimal import Decimal
from io import StringIO

import pytest
from rich.console import Console

from projtrack.cli.menu import ProjectMenu
from projtrack.entities import Project
from projtrack.service import ProjectService


class ScriptedInput:
    """Feeds canned answers to the menu's prompts, then signals end of input."""

    def __init__(self, *lines: str) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def make_menu(service: ProjectService, *lines: str) -> tuple[ProjectMenu, StringIO]:
    output = StringIO()
    console = Console(file=output, width=120, color_system=None)
    return ProjectMenu(service, console, read_line=ScriptedInput(*lines)), output


@pytest.mark.asyncio
async def test_blank_selection_exits(service: ProjectService) -> None:
    menu, output = make_menu(service, "")

    await menu.run()

    assert "Exiting the menu..." in output.getvalue()
    assert "You are not working with a project." in output.getvalue()


@pytest.mark.asyncio
async def test_end_of_input_exits(service: ProjectService) -> None:
    menu, output = make_menu(service)

    await menu.run()

    assert "Exiting the menu..." in output.getvalue()


@pytest.mark.asyncio
async def test_end_of_input_during_add_saves_nothing(service: ProjectService) -> None:
    """Input ending partway through an operation exits without persisting."""
    menu, output = make_menu(service, "1", "Bird feeder")

    await menu.run()

    assert "Exiting the menu..." in output.getvalue()
    assert await service.list() == []


@pytest.mark.asyncio
async def test_add_project(service: ProjectService) -> None:
    menu, output = make_menu(service, "1", "Bird feeder", "3.5", "", "2", "Cedar", "")

    await menu.run()

    projects = await service.list()
    assert len(projects) == 1
    assert projects[0].project_name == "Bird feeder"
    assert projects[0].estimated_hours == Decimal("3.50")
    assert projects[0].actual_hours is None
    assert projects[0].difficulty == 2
    assert projects[0].notes == "Cedar"
    assert "You added this project" in output.getvalue()


@pytest.mark.asyncio
async def test_list_projects_in_id_order(service: ProjectService) -> None:
    await service.add(Project(project_name="Zeta"))
    await service.add(Project(project_name="Alpha"))
    menu, output = make_menu(service, "2", "")

    await menu.run()

    text = output.getvalue()
    assert text.index("1: Zeta") < text.index("2: Alpha")


@pytest.mark.asyncio
async def test_invalid_selection_keeps_running(service: ProjectService) -> None:
    menu, output = make_menu(service, "9", "abc", "")

    await menu.run()

    text = output.getvalue()
    assert "9 is not valid. Try again." in text
    assert "abc is not a valid number." in text
    assert "Exiting the menu..." in text


@pytest.mark.asyncio
async def test_select_and_update_project(service: ProjectService) -> None:
    project = await service.add(
        Project(project_name="Stool", estimated_hours=Decimal("4.00"), difficulty=2)
    )
    menu, output = make_menu(
        service,
        "3", str(project.project_id),
        "4", "Step stool", "", "5.25", "", "Painted",
        "",
    )

    await menu.run()

    assert menu.current is not None
    assert menu.current.project_name == "Step stool"
    refreshed = await service.get_by_id(project.project_id)
    assert refreshed.project_name == "Step stool"
    assert refreshed.estimated_hours == Decimal("4.00")
    assert refreshed.actual_hours == Decimal("5.25")
    assert refreshed.difficulty == 2
    assert refreshed.notes == "Painted"
    assert "You are working with project: " in output.getvalue()


@pytest.mark.asyncio
async def test_update_without_selection(service: ProjectService) -> None:
    menu, output = make_menu(service, "4", "")

    await menu.run()

    assert "Please select a project." in output.getvalue()


@pytest.mark.asyncio
async def test_select_missing_project_reports_error(service: ProjectService) -> None:
    menu, output = make_menu(service, "3", "42", "")

    await menu.run()

    assert menu.current is None
    assert "Project with ID=42 does not exist." in output.getvalue()


@pytest.mark.asyncio
async def test_delete_selected_project_clears_selection(service: ProjectService) -> None:
    project = await service.add(Project(project_name="Trellis"))
    menu, output = make_menu(
        service,
        "3", str(project.project_id),
        "5", str(project.project_id),
        "",
    )

    await menu.run()

    assert menu.current is None
    assert f"Project {project.project_id} was successfully deleted." in output.getvalue()
    assert await service.list() == []


@pytest.mark.asyncio
async def test_delete_missing_project_keeps_running(service: ProjectService) -> None:
    menu, output = make_menu(service, "5", "31", "2", "")

    await menu.run()

    text = output.getvalue()
    assert "Project with ID=31 does not exist." in text
    assert "Exiting the menu..." in text
