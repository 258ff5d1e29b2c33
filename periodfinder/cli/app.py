"""
Main CLI application using Typer.
"""

import asyncio
import logging
import time
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console, Group
from rich.logging import RichHandler
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ..adapters.json_source import JsonTimetableSource
from ..adapters.rest_source import RestTimetableSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import PeriodFinderError
from ..domain.grid import build_day, build_grid
from ..domain.models import SCHOOL_DAYS, ClassSlot, Weekday
from ..domain.resolver import resolve
from ..services.timetable_service import TimetableService, TimetableStatus

app = typer.Typer(
    name="periodfinder",
    help="Show the current and next class from a weekly school timetable",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show log output.")] = False,
):
    """
    periodfinder - what class is on right now?
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)]
        )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration file.

    An explicitly given file must exist; without one, a missing default
    config falls back to the built-in demo settings.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if not config_path.exists():
        return AppConfig()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig) -> TimetableService:
    """Create the service for the configured record source."""
    if config.source == "rest":
        source = RestTimetableSource(
            base_url=config.rest.url,
            api_key=config.rest.api_key,
            slots_table=config.rest.slots_table,
            breaks_table=config.rest.breaks_table
        )
    elif config.source == "json":
        source = JsonTimetableSource(config.data_file)
    else:
        source = JsonTimetableSource.demo()

    return TimetableService(source=source, use_demo_fallback=config.use_demo_fallback)


def _parse_instant(at: Optional[str], tz: str):
    if at is None:
        return pendulum.now(tz)

    try:
        return pendulum.from_format(at, "YYYY-MM-DD HH:mm", tz=tz)
    except Exception as e:
        raise ValueError(f"Could not parse --at '{at}' (expected YYYY-MM-DD HH:mm): {e}") from e


def _describe_slot(slot: ClassSlot) -> str:
    details = [str(slot.interval)]
    if slot.room:
        details.append(slot.room)
    if slot.teacher:
        details.append(slot.teacher)

    return f"{slot.day.label}, {' | '.join(details)}"


def _render_status(status: TimetableStatus, config: AppConfig) -> Panel:
    """Build the "current / next class" panel."""
    resolution = status.resolution
    parts = []

    if resolution.current is not None:
        current = resolution.current
        parts.append(Text("Current class", style="dim"))
        parts.append(Text(current.subject, style=f"bold {config.color_for(current.subject)}"))
        parts.append(Text(_describe_slot(current)))
        parts.append(ProgressBar(total=100, completed=resolution.progress_percent, width=40))
        parts.append(Text(f"{resolution.progress_percent}% done", style="dim"))
    elif status.active_break is not None:
        parts.append(Text("Break", style="dim"))
        parts.append(Text(f"{status.active_break.name} ({status.active_break.interval})", style="bold"))
    else:
        parts.append(Text("No class in progress", style="yellow"))

    parts.append(Text(""))

    if resolution.next is not None:
        upcoming = resolution.next
        parts.append(Text("Next class", style="dim"))
        parts.append(Text(upcoming.subject, style=f"bold {config.color_for(upcoming.subject)}"))
        parts.append(Text(_describe_slot(upcoming)))
    else:
        parts.append(Text("No upcoming classes", style="dim"))

    title = status.at.strftime("%A, %d %B %Y • %H:%M")
    return Panel(Group(*parts), title=title, expand=False)


@app.command()
def now(
    config_file: ConfigOption = None,
    at: Annotated[Optional[str], typer.Option("--at", help="Resolve at this time instead of now (YYYY-MM-DD HH:mm)")] = None,
):
    """
    Show the class in progress and the next one.

    Examples:

        periodfinder now
        periodfinder now --at "2024-11-25 08:20"
    """
    try:
        config = _load_config(config_file)
        instant = _parse_instant(at, config.timezone)
        service = _build_service(config)

        status = asyncio.run(service.status_at(instant))

        console.print()
        console.print(_render_status(status, config))
        console.print()

    except (FileNotFoundError, ValueError, PeriodFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _slot_cell(slot: ClassSlot, config: AppConfig, is_current: bool) -> Text:
    """Grid cell with subject, teacher and room; the running lesson is marked."""
    style = config.color_for(slot.subject)
    if is_current:
        style = f"bold reverse {style}"

    cell = Text(slot.subject, style=style)
    if slot.teacher:
        cell.append(f"\n{slot.teacher}", style="dim")
    if slot.room:
        cell.append(f"\n{slot.room}", style="dim")
    if is_current:
        cell.append("\n(now)", style="bold")
    return cell


@app.command()
def week(
    config_file: ConfigOption = None,
    at: Annotated[Optional[str], typer.Option("--at", help="Highlight the lesson running at this time (YYYY-MM-DD HH:mm)")] = None,
):
    """
    Show the weekly timetable with breaks.

    The lesson in progress is highlighted.
    """
    try:
        config = _load_config(config_file)
        instant = _parse_instant(at, config.timezone)
        service = _build_service(config)
        schedule = asyncio.run(service.get_schedule())

        if schedule.is_empty():
            console.print("[yellow]The timetable is empty.[/yellow]")
            return

        current = resolve(schedule, instant).current

        table = Table(
            title="Class Timetable",
            show_header=True,
            header_style="bold cyan",
            show_lines=True
        )
        table.add_column("Time", style="bold", no_wrap=True)
        for day in SCHOOL_DAYS:
            table.add_column(day.label)

        for row in build_grid(schedule):
            if row.is_break:
                label = Text(row.break_item.name, style="dim italic", justify="center")
                table.add_row(str(row.interval), label, *[""] * (len(SCHOOL_DAYS) - 1))
                continue

            cells = []
            for day in SCHOOL_DAYS:
                slot = row.cells.get(day)
                if slot is None:
                    cells.append("")
                    continue
                cells.append(_slot_cell(slot, config, slot == current))
            table.add_row(str(row.interval), *cells)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, PeriodFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def today(
    config_file: ConfigOption = None,
    at: Annotated[Optional[str], typer.Option("--at", help="Show the day of this time instead of today (YYYY-MM-DD HH:mm)")] = None,
):
    """
    Show today's lessons and breaks in order.
    """
    try:
        config = _load_config(config_file)
        instant = _parse_instant(at, config.timezone)
        service = _build_service(config)
        schedule = asyncio.run(service.get_schedule())

        day = Weekday.of(instant)
        rows = build_day(schedule, day)

        if not rows:
            console.print(f"\n[dim]No classes scheduled for {day.label}[/dim]\n")
            return

        current = resolve(schedule, instant).current

        table = Table(
            title=day.label,
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Time", style="bold", no_wrap=True)
        table.add_column("Class")

        for row in rows:
            if row.is_break:
                table.add_row(str(row.interval), Text(row.break_item.name, style="dim italic"))
                continue

            slot = row.cells[day]
            table.add_row(str(row.interval), _slot_cell(slot, config, slot == current))

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, PeriodFinderError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def watch(
    config_file: ConfigOption = None,
    interval: Annotated[Optional[int], typer.Option("--interval", "-i", help="Seconds between refreshes")] = None,
):
    """
    Keep the current/next class panel up to date.

    The timetable is reloaded on every refresh. Press Ctrl-C to stop.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    seconds = interval or config.refresh_seconds
    service = _build_service(config)

    try:
        with Live(console=console, auto_refresh=False) as live:
            while True:
                service.invalidate()
                try:
                    status = asyncio.run(service.status_at(pendulum.now(config.timezone)))
                    live.update(_render_status(status, config), refresh=True)
                except PeriodFinderError as e:
                    live.update(Text(f"Error: {e}", style="bold red"), refresh=True)
                time.sleep(seconds)
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]periodfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
