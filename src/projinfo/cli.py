"""Command-line interface for projinfo."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .candidates import CandidateSource, filter_entries, read_candidates
from .classifier import classify
from .config import ConfigManager
from .models import icon_for
from .presenter import InfoView
from .registry import default_registry
from .runner import ProcessRunner

app = typer.Typer(
    name="projinfo",
    help="Classify project directories and show what they are.",
    rich_markup_mode="rich",
)
exclude_app = typer.Typer(help="Manage directories hidden from project listings")
app.add_typer(exclude_app, name="exclude")

console = Console()
logger = logging.getLogger(__name__)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        print(f"[cyan]projinfo[/cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


def configure_logging(config_manager: ConfigManager, debug: bool):
    """Log to stderr and to the state directory log file."""
    level = logging.DEBUG if debug else getattr(
        logging, config_manager.settings.log_level.upper(), logging.WARNING
    )
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(config_manager.log_file, delay=True),
            logging.StreamHandler(sys.stderr),
        ],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
):
    """
    Projinfo - project classification and metadata for directories.
    """
    try:
        config_manager = ConfigManager()
    except (SettingsError, ValidationError) as e:
        print(f"[red]Error:[/red] invalid settings: {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(config_manager, debug)
    ctx.obj = config_manager


def _resolve_dir(path: Optional[Path]) -> Path:
    if path is None:
        path = Path.cwd()
    path = path.resolve()
    if not path.is_dir():
        print(f"[red]Error:[/red] {path} is not a valid directory")
        raise typer.Exit(1)
    return path


@app.command(name="info", help="Show what kind of project a directory is")
def show_info(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(
        None,
        help="Project directory (defaults to current directory)",
    ),
):
    """Classify a directory and print every snapshot as it is produced."""
    path = _resolve_dir(path)
    config_manager: ConfigManager = ctx.obj
    settings = config_manager.settings

    async def describe() -> bool:
        runner = ProcessRunner()
        registry = default_registry(
            runner,
            readme_names=settings.readme_names,
            buildozer_command=settings.buildozer_command,
        )
        view = InfoView(console)
        token = view.show(str(path))
        started = registry.build_info(path, view.update, token)
        await runner.drain()
        view.close()
        return started

    if not asyncio.run(describe()):
        print(f"[yellow]Not a recognized project:[/yellow] {path}")
        raise typer.Exit(1)


@app.command(name="type", help="Print the project type of a directory")
def show_type(
    path: Optional[Path] = typer.Argument(
        None,
        help="Project directory (defaults to current directory)",
    ),
):
    """Print the type tag of a directory."""
    path = _resolve_dir(path)
    project_type = classify(path)
    if project_type is None:
        print(f"[yellow]Not a recognized project:[/yellow] {path}")
        raise typer.Exit(1)
    console.print(f"{icon_for(project_type)} {project_type.value}", highlight=False)


@app.command(name="list", help="List candidate directories that are projects")
def list_projects(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Filter passed to the candidate command"),
    stdin: bool = typer.Option(
        False,
        "--stdin",
        help="Read candidate paths from standard input instead",
    ),
):
    """List projects among the candidate directories."""
    config_manager: ConfigManager = ctx.obj
    excludes = config_manager.exclusions()

    if stdin:
        candidates = list(read_candidates(sys.stdin))
    else:
        source = CandidateSource(config_manager.settings.candidate_command)
        candidates = source.query(query)

    count = 0
    for entry in filter_entries(candidates, excludes):
        console.print(entry.display, highlight=False, markup=False, soft_wrap=True)
        count += 1
    logger.debug(f"Listed {count} of {len(candidates)} candidate(s)")


@exclude_app.command(name="add", help="Hide directories starting with PREFIX")
def exclude_add(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Path prefix to exclude"),
):
    """Persist an exclusion prefix."""
    config_manager: ConfigManager = ctx.obj
    if config_manager.add_exclude_dir(prefix):
        print(f"[green]Excluded:[/green] {prefix}")
    else:
        print(f"[yellow]Already excluded:[/yellow] {prefix}")


@exclude_app.command(name="list", help="Show excluded prefixes")
def exclude_list(ctx: typer.Context):
    """List exclusion prefixes from settings and the config file."""
    config_manager: ConfigManager = ctx.obj
    prefixes = config_manager.exclusions().get_exclude_dirs()
    if not prefixes:
        print("[yellow]No excluded directories[/yellow]")
        return

    table = Table(title="Excluded Directories")
    table.add_column("Prefix", style="cyan")
    table.add_column("Source", style="green")
    for prefix in prefixes:
        source = "config" if prefix in config_manager.saved_exclude_dirs else "environment"
        table.add_row(prefix, source)
    console.print(table)


if __name__ == "__main__":
    app()
