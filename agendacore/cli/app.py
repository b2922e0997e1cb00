"""
Main CLI application using Typer.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.json_schedule_store import JsonScheduleStore
from ..adapters.static_identity import StaticIdentityProvider
from ..config import AppConfig, get_default_config_path
from ..domain.access import AccessAction
from ..domain.exceptions import AgendaError
from ..domain.formatting import format_slots, summarize
from ..domain.models import DAY_KEYS, WeeklySchedule
from ..domain.roles import parse_role, role_home
from ..domain.schedule_checks import find_slot_issues
from ..services.access_service import AccessService, Profile
from ..services.schedule_service import OwnerRef, ScheduleService

app = typer.Typer(
    name="agendacore",
    help="Route access checks and weekly working hours for the scheduling platform",
    add_completion=False,
)
schedule_app = typer.Typer(help="Show and edit weekly working hours", add_completion=False)
app.add_typer(schedule_app, name="schedule")

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    config: AppConfig
    data_file: Path


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _fail(exc: Exception) -> None:
    console.print(f"[bold red]Erro:[/bold red] {exc}")
    raise typer.Exit(1)


def _parse_day(value: str) -> int:
    """Accept a day index (0=monday) or a day key."""
    text = value.strip().lower()
    if text.isdigit():
        index = int(text)
        if not 0 <= index < len(DAY_KEYS):
            raise ValueError(f"Day index must be between 0 and 6, got {index}")
        return index
    if text not in DAY_KEYS:
        raise ValueError(f"Unknown day {value!r}. Use 0-6 or one of: {', '.join(DAY_KEYS)}")
    return DAY_KEYS.index(text)


def _slot_index(schedule: WeeklySchedule, day_index: int, slot_number: int) -> int:
    """Convert a 1-based slot number from the command line."""
    slots = schedule[day_index].slots
    if not 1 <= slot_number <= len(slots):
        raise ValueError(f"{schedule[day_index].label} has {len(slots)} slot(s), got slot {slot_number}")
    return slot_number - 1


def _schedule_service(ctx: typer.Context) -> ScheduleService:
    return ScheduleService(JsonScheduleStore(_state(ctx).data_file))


def _print_schedule(owner: OwnerRef, schedule: WeeklySchedule) -> None:
    table = Table(
        title=f"Horário de funcionamento - {owner}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", style="dim")
    table.add_column("Dia", style="bold yellow")
    table.add_column("Status")
    table.add_column("Horários")

    for index, day in enumerate(schedule):
        status = "[green]Aberto[/green]" if day.is_open else "[dim]Fechado[/dim]"
        table.add_row(str(index), day.label, status, format_slots(day))

    console.print()
    console.print(table)
    console.print(f"[bold]Resumo:[/bold] {summarize(schedule)}")
    console.print()


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    data_file: Annotated[Optional[Path], typer.Option("--data", help="Schedule JSON file (overrides the config)")] = None,
):
    """
    Load configuration and set up logging for every command.
    """
    config_path = config_file or get_default_config_path()
    try:
        if config_file is not None:
            config = AppConfig.load_from_yaml(config_path)
        else:
            config = AppConfig.load_or_default(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    logging.basicConfig(
        level=config.logging_level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    logger.debug("Loaded configuration from %s", config_path)

    resolved = data_file or config.resolve_data_file(config_path.parent)
    ctx.obj = CliState(config=config, data_file=resolved)


@app.command()
def routes(ctx: typer.Context):
    """
    List the route table and who may open each route.
    """
    table = Table(title="Rotas", show_header=True, header_style="bold cyan")
    table.add_column("Rota", style="bold yellow")
    table.add_column("Nome")
    table.add_column("Login")
    table.add_column("Perfis")

    for rule in _state(ctx).config.route_table():
        roles = ", ".join(sorted(r.value for r in rule.allowed_roles)) if rule.allowed_roles else "todos"
        table.add_row(rule.pattern, rule.name, "sim" if rule.require_auth else "não", roles)

    console.print()
    console.print(table)
    console.print()


@app.command()
def check(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Path to open, e.g. /negocio/lojas")],
    role: Annotated[Optional[str], typer.Option("--role", "-r", help="Role of the signed-in user")] = None,
    anonymous: Annotated[bool, typer.Option("--anonymous", help="Check as a signed-out visitor")] = False,
    loading: Annotated[bool, typer.Option("--loading", help="Simulate a session that is still loading")] = False,
):
    """
    Show what happens when a user navigates to PATH.

    Examples:

        agendacore check /admin/usuarios --role business_owner

        agendacore check /negocio/lojas --anonymous
    """
    if anonymous or role is None:
        provider = StaticIdentityProvider.anonymous(loading=loading)
    else:
        if parse_role(role) is None:
            console.print(f"[yellow]Aviso: perfil desconhecido '{role}'[/yellow]")
        provider = StaticIdentityProvider(profile=Profile(id="cli-user", role=role), loading=loading)

    service = AccessService(provider, route_table=_state(ctx).config.route_table())
    decision = service.navigate(path)

    styles = {
        AccessAction.RENDER: "green",
        AccessAction.REDIRECT: "yellow",
        AccessAction.LOADING: "cyan",
        AccessAction.NOT_FOUND: "red",
    }
    style = styles[decision.action]
    console.print(f"\n{path}: [bold {style}]{decision.describe()}[/bold {style}]\n")


@app.command()
def home(role: Annotated[str, typer.Argument(help="Role name, e.g. professional")]):
    """
    Show the landing page for a role after login.
    """
    if parse_role(role) is None:
        console.print(f"[yellow]Aviso: perfil desconhecido '{role}'[/yellow]")
    console.print(role_home(role))


@schedule_app.command("show")
def show_schedule(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Owner such as store:42, professional:7 or business:1")],
):
    """
    Show the weekly working hours of an owner.
    """
    try:
        owner_ref = OwnerRef.parse(owner)
        schedule = _schedule_service(ctx).load(owner_ref)
    except (AgendaError, ValueError) as e:
        _fail(e)
    _print_schedule(owner_ref, schedule)


def _edit(ctx: typer.Context, owner: str, action) -> None:
    """Open the owner's schedule, apply ``action`` and print the result."""
    try:
        owner_ref = OwnerRef.parse(owner)
        availability = _schedule_service(ctx).open(owner_ref)
        action(availability)
    except (AgendaError, ValueError) as e:
        _fail(e)
    _print_schedule(owner_ref, availability.schedule)


@schedule_app.command("open")
def open_day(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
    day: Annotated[str, typer.Argument(help="Day index (0=monday) or name")],
):
    """
    Mark a day as open.
    """
    _edit(ctx, owner, lambda a: a.set_day_open(_parse_day(day), True))


@schedule_app.command("close")
def close_day(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
    day: Annotated[str, typer.Argument(help="Day index (0=monday) or name")],
):
    """
    Mark a day as closed. Its time slots are kept.
    """
    _edit(ctx, owner, lambda a: a.set_day_open(_parse_day(day), False))


@schedule_app.command("set-slot")
def set_slot(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
    day: Annotated[str, typer.Argument(help="Day index (0=monday) or name")],
    slot: Annotated[int, typer.Argument(help="Slot number, starting at 1")],
    start: Annotated[Optional[str], typer.Option("--start", help="New start time (HH:MM)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="New end time (HH:MM)")] = None,
):
    """
    Change the start and/or end time of one slot.
    """
    if start is None and end is None:
        _fail(ValueError("Provide --start and/or --end"))

    def apply(availability):
        day_index = _parse_day(day)
        slot_index = _slot_index(availability.schedule, day_index, slot)
        if start is not None:
            availability.set_slot_time(day_index, slot_index, "start", start)
        if end is not None:
            availability.set_slot_time(day_index, slot_index, "end", end)

    _edit(ctx, owner, apply)


@schedule_app.command("add-slot")
def add_slot(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
    day: Annotated[str, typer.Argument(help="Day index (0=monday) or name")],
):
    """
    Append a 13:00-18:00 slot to a day.
    """
    _edit(ctx, owner, lambda a: a.add_slot(_parse_day(day)))


@schedule_app.command("remove-slot")
def remove_slot(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
    day: Annotated[str, typer.Argument(help="Day index (0=monday) or name")],
    slot: Annotated[int, typer.Argument(help="Slot number, starting at 1")],
):
    """
    Remove a slot. The last remaining slot of a day cannot be removed.
    """

    def apply(availability):
        day_index = _parse_day(day)
        slot_index = _slot_index(availability.schedule, day_index, slot)
        if not availability.remove_slot(day_index, slot_index):
            console.print("[yellow]Um dia precisa de pelo menos um horário; nada foi removido.[/yellow]")

    _edit(ctx, owner, apply)


@schedule_app.command("copy")
def copy_day(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
    day: Annotated[str, typer.Argument(help="Day to copy to every other day")],
):
    """
    Apply one day's hours to all days of the week.
    """
    _edit(ctx, owner, lambda a: a.copy_day_to_all(_parse_day(day)))


@schedule_app.command("check")
def check_schedule(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
    include_closed: Annotated[bool, typer.Option("--include-closed", help="Also check closed days")] = False,
):
    """
    Report inverted, overlapping or malformed slots.
    """
    try:
        owner_ref = OwnerRef.parse(owner)
        schedule = _schedule_service(ctx).load(owner_ref)
    except (AgendaError, ValueError) as e:
        _fail(e)

    issues = find_slot_issues(schedule, include_closed=include_closed)
    if not issues:
        console.print("\n[bold green]✓ Nenhum problema encontrado.[/bold green]\n")
        return

    console.print(f"\n[bold yellow]⚠ {len(issues)} problema(s) encontrado(s):[/bold yellow]")
    for issue in issues:
        console.print(f"  {issue.message}")
    console.print()
    raise typer.Exit(2)


@schedule_app.command("reset")
def reset_schedule(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Schedule owner, e.g. store:42")],
):
    """
    Delete the stored schedule so the default template applies again.
    """
    try:
        owner_ref = OwnerRef.parse(owner)
        _schedule_service(ctx).delete(owner_ref)
    except (AgendaError, ValueError) as e:
        _fail(e)
    console.print(f"\n[green]✓ Horário de {owner_ref} removido.[/green]\n")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]agendacore[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
