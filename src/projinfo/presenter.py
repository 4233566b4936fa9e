"""Rendering of project info snapshots with rich."""

import dataclasses
from typing import List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .classifier import normalize_dir
from .emit import Generation, RequestToken
from .models import ProjectInfo


def render_info(info: ProjectInfo) -> Panel:
    """Build a panel with title, path, description and type details."""
    title = f"{info.icon} {info.name or ''}".strip()
    parts: List = [
        Text(title, style="bold cyan"),
        Text(info.dir, style="dim"),
    ]
    if info.version:
        parts.append(Text(f"version {info.version}", style="green"))

    if info.description:
        parts.append(Text(""))
        parts.extend(Text(line) for line in info.description)

    details = info.details()
    if details is not None:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for f in dataclasses.fields(details):
            value = getattr(details, f.name)
            if value is not None:
                table.add_row(f.name.replace("_", " "), str(value))
        if table.row_count:
            parts.append(Text(""))
            parts.append(table)

    return Panel(Group(*parts), expand=False)


class InfoView:
    """Shows the latest snapshot for one directory at a time.

    Selecting a new directory advances the generation, so late snapshots
    for the previous one are dropped before they reach :meth:`update`.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.generation = Generation()
        self.subject: Optional[str] = None
        self.latest: Optional[ProjectInfo] = None
        self.closed = False

    def show(self, directory: str) -> RequestToken:
        """Switch to ``directory`` and return the token for its requests."""
        self.generation.advance()
        self.subject = normalize_dir(directory)
        self.latest = None
        return self.generation.token()

    def close(self):
        self.closed = True
        self.generation.advance()

    def update(self, info: ProjectInfo):
        """Render ``info`` if it belongs to the directory being shown."""
        if self.closed or info.dir != self.subject:
            return
        self.latest = info
        self.console.print(render_info(info))
