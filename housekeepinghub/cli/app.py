"""
Main CLI application using Typer.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..adapters.json_storage import JsonRosterStorage
from ..config import HubConfig
from ..domain.booking import Booking
from ..domain.exceptions import HubError
from ..domain.housekeeping_details import HousekeepingDetails
from ..domain.models import Client, Housekeeper
from ..domain.period import Period, parse_calendar_date
from ..logging_setup import configure_logging
from ..services.roster_service import RosterService

app = typer.Typer(
    name="housekeepinghub",
    help="Manage housekeeping clients, housekeeper bookings and call leads",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./hub.yaml"),
]
IndexArgument = Annotated[int, typer.Argument(help="Position in the displayed list (from 1)")]
DateArgument = Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")]
SlotArgument = Annotated[str, typer.Argument(help="Time of day (am|pm)")]


class Session:
    """Loaded config, roster and service for one command."""

    def __init__(self, config_file: Optional[Path]):
        self.config = HubConfig.load_or_default(config_file)
        configure_logging(self.config.log_level, console)
        self.storage = JsonRosterStorage(self.config.resolve_data_file(config_file))
        self.roster = self.storage.load()
        self.service = RosterService(self.roster, today=self.config.resolve_today())

    def save(self) -> None:
        self.storage.save(self.roster)


@contextmanager
def _session(config_file: Optional[Path], *, save: bool = False) -> Iterator[Session]:
    """
    Open a session and turn domain errors into a single error line and exit code 1.
    """
    try:
        session = Session(config_file)
        yield session
        if save:
            session.save()
    except (HubError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def _print_clients(title: str, clients: List[Client]) -> None:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column("Name", style="bold yellow")
    table.add_column("Phone")
    table.add_column("Next due")
    table.add_column("Housekeeping details")

    for idx, client in enumerate(clients, 1):
        next_due = client.next_due_date().isoformat() if client.has_details() else "-"
        table.add_row(
            str(idx),
            client.name,
            client.phone,
            next_due,
            client.details.describe_with_deferment(),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def leads(config_file: ConfigOption = None):
    """
    List clients due for a call, soonest due first.
    """
    with _session(config_file) as session:
        found = session.service.leads()
        if not found:
            console.print("[yellow]No leads today.[/yellow]")
            return
        _print_clients(f"Leads for {session.service.today.isoformat()}", found)
        console.print(f"{len(found)} client(s) listed!")


@app.command("list-clients")
def list_clients(config_file: ConfigOption = None):
    """
    List all clients with their housekeeping details.
    """
    with _session(config_file) as session:
        clients = list(session.roster.clients())
        if not clients:
            console.print("[yellow]No clients in the roster.[/yellow]")
            return
        _print_clients("Clients", clients)


@app.command("list-housekeepers")
def list_housekeepers(config_file: ConfigOption = None):
    """
    List all housekeepers.
    """
    with _session(config_file) as session:
        housekeepers = session.roster.housekeepers()
        if not housekeepers:
            console.print("[yellow]No housekeepers in the roster.[/yellow]")
            return

        table = Table(title="Housekeepers", show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim")
        table.add_column("Name", style="bold yellow")
        table.add_column("Area")
        table.add_column("Bookings")
        for idx, housekeeper in enumerate(housekeepers, 1):
            table.add_row(str(idx), housekeeper.name, housekeeper.area, str(len(housekeeper.bookings)))

        console.print()
        console.print(table)
        console.print()


@app.command("add-client")
def add_client(
    name: Annotated[str, typer.Argument(help="Client name")],
    phone: Annotated[str, typer.Option("--phone", help="Phone number")] = "",
    email: Annotated[str, typer.Option("--email", help="Email address")] = "",
    address: Annotated[str, typer.Option("--address", help="Home address")] = "",
    area: Annotated[str, typer.Option("--area", help="Area, e.g. west")] = "",
    details: Annotated[
        Optional[str],
        typer.Option("--details", help="Housekeeping details: YYYY-MM-DD n (days|weeks|months|years)"),
    ] = None,
    config_file: ConfigOption = None,
):
    """
    Add a client to the roster.
    """
    with _session(config_file, save=True) as session:
        housekeeping = (
            HousekeepingDetails.from_user_text(details) if details else HousekeepingDetails.empty()
        )
        client = Client(
            name=name, phone=phone, email=email, address=address, area=area, details=housekeeping
        )
        session.roster.add(client)
        console.print(f"[green]✓ Added client {name}[/green]")


@app.command("add-housekeeper")
def add_housekeeper(
    name: Annotated[str, typer.Argument(help="Housekeeper name")],
    phone: Annotated[str, typer.Option("--phone", help="Phone number")] = "",
    email: Annotated[str, typer.Option("--email", help="Email address")] = "",
    address: Annotated[str, typer.Option("--address", help="Home address")] = "",
    area: Annotated[str, typer.Option("--area", help="Area served, e.g. west")] = "",
    config_file: ConfigOption = None,
):
    """
    Add a housekeeper to the roster.
    """
    with _session(config_file, save=True) as session:
        session.roster.add(
            Housekeeper(name=name, phone=phone, email=email, address=address, area=area)
        )
        console.print(f"[green]✓ Added housekeeper {name}[/green]")


@app.command()
def bookings(index: IndexArgument, config_file: ConfigOption = None):
    """
    List the bookings of a housekeeper in date order.
    """
    with _session(config_file) as session:
        console.print(session.service.list_housekeeper_bookings(index), markup=False)


@app.command()
def book(
    index: IndexArgument,
    date: DateArgument,
    slot: SlotArgument,
    config_file: ConfigOption = None,
):
    """
    Book a housekeeper for a half day.

    Example:

        housekeepinghub book 1 2024-05-12 am
    """
    with _session(config_file, save=True) as session:
        message = session.service.add_housekeeper_booking(index, f"{date} {slot}")
        console.print(message, markup=False)


@app.command()
def unbook(
    index: IndexArgument,
    booking_index: Annotated[int, typer.Argument(help="Booking position as shown by 'bookings'")],
    config_file: ConfigOption = None,
):
    """
    Delete a booking of a housekeeper.
    """
    with _session(config_file, save=True) as session:
        message = session.service.delete_housekeeper_booking(index, booking_index)
        console.print(message, markup=False)


@app.command()
def search(
    area: Annotated[str, typer.Argument(help="Area to search, e.g. west")],
    date: DateArgument,
    slot: SlotArgument,
    config_file: ConfigOption = None,
):
    """
    Find housekeepers in an area who are free at a given date and time.
    """
    booking_text = f"{date} {slot}"
    with _session(config_file) as session:
        available = session.service.search_available_housekeepers(area, booking_text)
        if not available:
            console.print(f"No housekeepers available at [{area}, {booking_text}]!", markup=False)
            return

        console.print(
            f"{len(available)} housekeepers available at [{area}, {booking_text}] listed!",
            markup=False,
        )
        for housekeeper in available:
            console.print(f"  {housekeeper.name} ({housekeeper.phone or 'no phone'})")


@app.command("set-details")
def set_details(
    index: IndexArgument,
    last_date: DateArgument,
    quantity: Annotated[int, typer.Argument(help="Interval quantity")],
    unit: Annotated[str, typer.Argument(help="days|weeks|months|years")],
    config_file: ConfigOption = None,
):
    """
    Set the last housekeeping date and preferred interval of a client.

    Example:

        housekeepinghub set-details 2 2024-01-01 15 days
    """
    with _session(config_file, save=True) as session:
        details = HousekeepingDetails.from_user_text(f"{last_date} {quantity} {unit}")
        client = session.service.set_client_details(index, details)
        console.print(RosterService.describe_client(client), markup=False)


@app.command("remove-details")
def remove_details(index: IndexArgument, config_file: ConfigOption = None):
    """
    Remove the housekeeping details of a client.
    """
    with _session(config_file, save=True) as session:
        client = session.service.remove_client_details(index)
        console.print(RosterService.describe_client(client), markup=False)


@app.command("edit-details")
def edit_details(
    index: IndexArgument,
    last_date: Annotated[
        Optional[str], typer.Option("--last-date", help="Last housekeeping date (YYYY-MM-DD)")
    ] = None,
    interval: Annotated[
        Optional[str], typer.Option("--interval", help="Preferred interval, e.g. '2 weeks'")
    ] = None,
    booking: Annotated[
        Optional[str], typer.Option("--booking", help="Booking date, e.g. '2024-01-17 pm'")
    ] = None,
    config_file: ConfigOption = None,
):
    """
    Edit the last date, preferred interval or booking of a client.
    """
    with _session(config_file, save=True) as session:
        client = session.service.edit_client_details(
            index,
            last_housekeeping_date=(
                parse_calendar_date(last_date, HousekeepingDetails.MESSAGE_CONSTRAINTS)
                if last_date else None
            ),
            preferred_interval=Period.from_user_text(interval) if interval else None,
            booking=Booking.parse(booking) if booking else None,
        )
        console.print(RosterService.describe_client(client), markup=False)


@app.command("client-book")
def client_book(
    index: IndexArgument,
    date: DateArgument,
    slot: SlotArgument,
    config_file: ConfigOption = None,
):
    """
    Record the upcoming booking of a client.
    """
    with _session(config_file, save=True) as session:
        client = session.service.add_client_booking(index, f"{date} {slot}")
        console.print(RosterService.describe_client(client), markup=False)


@app.command("client-unbook")
def client_unbook(index: IndexArgument, config_file: ConfigOption = None):
    """
    Remove the upcoming booking of a client.
    """
    with _session(config_file, save=True) as session:
        client = session.service.delete_client_booking(index)
        console.print(RosterService.describe_client(client), markup=False)


@app.command()
def defer(
    index: IndexArgument,
    quantity: Annotated[int, typer.Argument(help="Deferment quantity")],
    unit: Annotated[str, typer.Argument(help="days|weeks|months|years")],
    config_file: ConfigOption = None,
):
    """
    Call a client later than their schedule suggests.
    """
    with _session(config_file, save=True) as session:
        message = session.service.defer_client(index, Period.of(quantity, unit))
        console.print(message, markup=False)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]housekeepinghub[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
