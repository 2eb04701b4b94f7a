"""Interactive project menu.

A numbered selection loop over the project service. One project can be
selected at a time; update works on the selected project. Blank input at
the selection prompt exits. Any projtrack error is printed and the loop
carries on.
"""

from __future__ import annotations

import uuid
from typing import Callable

from rich.console import Console

from projtrack.cli.inputs import parse_decimal, parse_int, parse_text
from projtrack.cli.project import merge_changes, project_panel, project_summary
from projtrack.entities import Project
from projtrack.exceptions import ProjtrackError
from projtrack.logging import get_logger, set_correlation_id
from projtrack.service import ProjectService

logger = get_logger(__name__)

OPERATIONS = [
    "1) Add a project",
    "2) List projects",
    "3) Select a project",
    "4) Update project details",
    "5) Delete a project",
]


class ProjectMenu:
    """Menu loop state.

    Attributes:
        service: Service every selection calls into.
        console: Rich console for output.
        current: The selected project aggregate, or None.
    """

    def __init__(
        self,
        service: ProjectService,
        console: Console,
        read_line: Callable[[str], str] | None = None,
    ) -> None:
        self.service = service
        self.console = console
        self.read_line = read_line or console.input
        self.current: Project | None = None
        self._handlers = {
            1: self.add_project,
            2: self.list_projects,
            3: self.select_project,
            4: self.update_project,
            5: self.delete_project,
        }

    async def run(self) -> None:
        """Process selections until the user enters a blank line or input ends."""
        while True:
            try:
                selection = self._read_selection()
                if selection is None:
                    self.console.print("Exiting the menu...")
                    return

                handler = self._handlers.get(selection)
                if handler is None:
                    self.console.print(f"\n{selection} is not valid. Try again.")
                    continue

                set_correlation_id(uuid.uuid4().hex)
                await handler()
            except EOFError:
                self.console.print("\nExiting the menu...")
                return
            except ProjtrackError as e:
                logger.info("menu_selection_failed", error_type=type(e).__name__, error=str(e))
                self.console.print(f"\n[red]Error:[/red] {e} Try again.")
            finally:
                set_correlation_id(None)

    def _read_selection(self) -> int | None:
        self.console.print("\nThese are the available selections. Press Enter to quit:")
        for line in OPERATIONS:
            self.console.print(f"   {line}")

        if self.current is None:
            self.console.print("\nYou are not working with a project.")
        else:
            self.console.print(
                f"\nYou are working with project: {project_summary(self.current)}",
                highlight=False,
            )

        return parse_int(self._prompt("\nEnter a menu selection"))

    def _prompt(self, text: str) -> str:
        return self.read_line(f"{text}: ")

    async def add_project(self) -> None:
        project = Project(
            project_name=parse_text(self._prompt("Enter the project name")),
            estimated_hours=parse_decimal(self._prompt("Enter the estimated hours")),
            actual_hours=parse_decimal(self._prompt("Enter the actual hours")),
            difficulty=parse_int(self._prompt("Enter the project difficulty (1-5)")),
            notes=parse_text(self._prompt("Enter the project notes")),
        )
        created = await self.service.add(project)
        self.console.print(project_panel(created, title="You added this project"))

    async def list_projects(self) -> list[Project]:
        projects = await self.service.list()
        self.console.print("\nProjects:")
        for p in projects:
            self.console.print(f"   {project_summary(p)}", highlight=False)
        return projects

    async def select_project(self) -> None:
        await self.list_projects()
        project_id = parse_int(self._prompt("Enter a project ID to select a project"))
        if project_id is None:
            return
        self.current = await self.service.get_by_id(project_id)
        self.console.print(project_panel(self.current))

    async def update_project(self) -> None:
        if self.current is None:
            self.console.print("\nPlease select a project.")
            return

        cur = self.current
        changes = Project(
            project_name=parse_text(self._prompt(f"Enter the project name ({cur.project_name})")),
            estimated_hours=parse_decimal(
                self._prompt(f"Enter the estimated hours ({cur.estimated_hours})")
            ),
            actual_hours=parse_decimal(
                self._prompt(f"Enter the actual hours ({cur.actual_hours})")
            ),
            difficulty=parse_int(
                self._prompt(f"Enter the project difficulty (1-5) ({cur.difficulty})")
            ),
            notes=parse_text(self._prompt(f"Enter the project notes ({cur.notes})")),
        )

        await self.service.update(merge_changes(cur, changes))
        self.current = await self.service.get_by_id(cur.project_id)

    async def delete_project(self) -> None:
        await self.list_projects()
        project_id = parse_int(self._prompt("Enter the ID of the project to delete"))
        if project_id is None:
            return

        await self.service.delete(project_id)
        self.console.print(f"Project {project_id} was successfully deleted.")

        if self.current is not None and self.current.project_id == project_id:
            self.current = None
