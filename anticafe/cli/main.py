"""
CLI interface for Anticafe.

Runs the interactive operator menu on top of the venue core.
"""

import logging
import math
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from anticafe.config.loader import CafeConfig, load_cafe_config
from anticafe.config.logging_setup import configure_logging
from anticafe.core.statistics import (
    NO_TABLE,
    summarize_current,
    summarize_history
)
from anticafe.core.venue import RELEASE_NOOP, Venue

logger = logging.getLogger(__name__)

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

MENU_ITEMS = (
    (1, "Seat guests at a table"),
    (2, "Release a table"),
    (3, "Current statistics"),
    (4, "History statistics"),
    (5, "Change price per minute"),
    (6, "Show status of all tables"),
    (0, "Exit"),
)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Anticafe table billing CLI."""
    if ctx.invoked_subcommand is None:
        console.print("Anticafe - Use --help to see available commands")


def _resolve_config(
    config_path: Optional[Path],
    price: Optional[float] = None,
    tables: Optional[int] = None,
    log_level: Optional[str] = None
) -> CafeConfig:
    """Load the config file (if any) and apply command-line overrides."""
    cafe_config = load_cafe_config(str(config_path)) if config_path else CafeConfig()
    if price is not None:
        cafe_config = replace(
            cafe_config,
            pricing=replace(cafe_config.pricing, price_per_minute=price)
        )
    if tables is not None:
        cafe_config = replace(cafe_config, table_count=tables)
    if log_level is not None:
        cafe_config = replace(
            cafe_config,
            logging=replace(cafe_config.logging, level=log_level.upper())
        )
    return cafe_config


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="ANTICAFE_CONFIG",
        help="Path to YAML configuration file"
    ),
    price: Optional[float] = typer.Option(
        None,
        "--price",
        "-p",
        help="Price per minute (overrides config)"
    ),
    tables: Optional[int] = typer.Option(
        None,
        "--tables",
        "-t",
        help="Number of tables (overrides config)"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: DEBUG, INFO, WARNING, ERROR or CRITICAL"
    )
):
    """
    Start the interactive table management menu.

    All state is kept in memory and is lost on exit.
    """
    try:
        cafe_config = _resolve_config(config, price, tables, log_level)
        configure_logging(cafe_config.logging)
        venue = Venue(
            price_per_minute=cafe_config.pricing.price_per_minute,
            table_count=cafe_config.table_count
        )
    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.critical("Startup failed: %s", e)
        console.print(f"[red]Error starting Anticafe:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    logger.info("Starting console menu")
    console.print("[bold]=== Welcome to Anticafe ===[/bold]")
    _run_menu(venue, cafe_config.pricing.currency)
    logger.info("Console menu closed")
    sys.exit(EXIT_CODE_PASS)


@app.command("config")
def show_config(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="ANTICAFE_CONFIG",
        help="Path to YAML configuration file"
    )
):
    """Print the resolved configuration."""
    try:
        cafe_config = _resolve_config(config)
    except (OSError, yaml.YAMLError, ValueError) as e:
        console.print(f"[red]Error loading configuration:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    table = Table(title="Anticafe configuration")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Price per minute", f"{cafe_config.pricing.price_per_minute:.2f}")
    table.add_row("Currency", cafe_config.pricing.currency)
    table.add_row("Tables", str(cafe_config.table_count))
    table.add_row("Log level", cafe_config.logging.level)
    table.add_row("Log file", cafe_config.logging.file or "-")
    console.print(table)
    sys.exit(EXIT_CODE_PASS)


def _format_currency(amount: float, currency: str) -> str:
    """Format money to two decimals with the currency label."""
    return f"{amount:,.2f} {currency}"


def _read_int(prompt: str) -> Optional[int]:
    """Read an integer, or report the bad input and return None."""
    text = console.input(prompt)
    try:
        return int(text.strip())
    except ValueError:
        logger.warning("Non-numeric input rejected: %r", text)
        console.print("[red]Error:[/] please enter a number!")
        return None


def _read_price(prompt: str) -> Optional[float]:
    """Read a finite decimal number, or report the bad input and return None."""
    text = console.input(prompt)
    try:
        value = float(text.strip().replace(",", "."))
    except ValueError:
        value = math.nan
    if not math.isfinite(value):
        logger.warning("Non-numeric price rejected: %r", text)
        console.print("[red]Error:[/] please enter a valid number!")
        return None
    return value


def _print_menu() -> None:
    console.print("\n[bold]--- MAIN MENU ---[/bold]")
    for key, label in MENU_ITEMS:
        console.print(f"{key}. {label}")


def _list_numbers(numbers, empty: str) -> str:
    return ", ".join(str(number) for number in numbers) or empty


def _occupy_action(venue: Venue, currency: str) -> None:
    free = [table.number for table in venue.roster.free()]
    console.print(f"Free tables: {_list_numbers(free, 'none')}")
    number = _read_int(f"Enter table number (1-{venue.total_tables}): ")
    if number is None:
        return
    try:
        if venue.occupy_table(number):
            console.print(f"[green]✓[/] Guests seated at table {number}")
        else:
            console.print(f"[yellow]Table {number} is already occupied![/]")
    except ValueError as e:
        console.print(f"[red]Error:[/] {str(e)}")


def _release_action(venue: Venue, currency: str) -> None:
    occupied = [table.number for table in venue.roster.occupied()]
    console.print(f"Occupied tables: {_list_numbers(occupied, 'none')}")
    number = _read_int(f"Enter table number to release (1-{venue.total_tables}): ")
    if number is None:
        return
    try:
        cost = venue.release_table(number)
    except ValueError as e:
        console.print(f"[red]Error:[/] {str(e)}")
        return
    if cost == RELEASE_NOOP:
        console.print(f"[yellow]Table {number} is already free![/]")
    else:
        console.print(f"[green]✓[/] Table {number} released. Amount due: {_format_currency(cost, currency)}")


def _current_statistics_action(venue: Venue, currency: str) -> None:
    logger.info("Showing current statistics")
    stats = summarize_current(venue)

    console.print("\n[bold]=== CURRENT STATISTICS ===[/bold]")
    console.print(f"Price per minute: {_format_currency(stats.price_per_minute, currency)}")
    console.print(f"Occupied tables: {stats.occupied_count} of {stats.total_tables}")
    console.print("\nOccupied tables:")
    if not stats.occupied_tables:
        console.print("  No occupied tables")
    for snapshot in stats.occupied_tables:
        console.print(
            f"  Table {snapshot.number}: {snapshot.minutes} min, "
            f"due: {_format_currency(snapshot.cost, currency)}"
        )
    console.print(
        f"\nTotal due if everyone left now: {_format_currency(stats.projected_total, currency)}"
    )


def _history_statistics_action(venue: Venue, currency: str) -> None:
    logger.info("Showing history statistics")
    stats = summarize_history(venue)

    console.print("\n[bold]=== HISTORY STATISTICS ===[/bold]")
    console.print(f"Total earnings: {_format_currency(stats.total_earnings, currency)}")
    console.print(f"Average occupation time: {stats.average_minutes:.1f} min")
    if stats.most_popular_table != NO_TABLE:
        console.print(
            f"Most popular table: {stats.most_popular_table} "
            f"({stats.most_popular_visits} visits)"
        )
    else:
        console.print("Most popular table: no data")
    if stats.most_profitable_table != NO_TABLE:
        console.print(
            f"Most profitable table: {stats.most_profitable_table} "
            f"({_format_currency(stats.most_profitable_earnings, currency)})"
        )
    else:
        console.print("Most profitable table: no data")
    console.print(f"Total visits: {stats.total_visits}")

    if not stats.recent_visits:
        return
    console.print("\n--- Recent visits ---")
    for record in stats.recent_visits:
        console.print(
            f"  Table {record.table_number}: "
            f"{record.start_time:%H:%M:%S} - {record.end_time:%H:%M:%S} "
            f"({record.duration_minutes} min, {_format_currency(record.total_cost, currency)})"
        )


def _change_price_action(venue: Venue, currency: str) -> None:
    console.print(f"Current price: {_format_currency(venue.price_per_minute, currency)} per minute")
    price = _read_price("Enter new price per minute: ")
    if price is None:
        return
    try:
        venue.set_price_per_minute(price)
    except ValueError as e:
        console.print(f"[red]Error:[/] {str(e)}")
        return
    console.print(f"[green]✓[/] Price changed to {_format_currency(price, currency)} per minute")


def _tables_status_action(venue: Venue, currency: str) -> None:
    now = venue.now()
    table = Table(title="Table status")
    table.add_column("Table", justify="right")
    table.add_column("Status")
    table.add_column("Time")
    table.add_column("Due", justify="right")

    for cafe_table in venue.tables:
        if cafe_table.is_occupied:
            minutes = cafe_table.billable_minutes(now)
            seconds = cafe_table.occupied_seconds(now) % 60
            table.add_row(
                str(cafe_table.number),
                "OCCUPIED",
                f"{minutes} min {seconds} sec",
                _format_currency(venue.calculate_cost(minutes), currency)
            )
        else:
            table.add_row(str(cafe_table.number), "free", "-", "-")
    console.print(table)


MENU_ACTIONS: Dict[int, Callable[[Venue, str], None]] = {
    1: _occupy_action,
    2: _release_action,
    3: _current_statistics_action,
    4: _history_statistics_action,
    5: _change_price_action,
    6: _tables_status_action,
}


def _run_menu(venue: Venue, currency: str) -> None:
    """Process menu commands until the operator exits or input ends."""
    while True:
        _print_menu()
        try:
            choice = _read_int("Select an action: ")
            if choice is None:
                continue
            if choice == 0:
                console.print("Shutting down...")
                return
            action = MENU_ACTIONS.get(choice)
            if action is None:
                console.print("Invalid choice. Try again.")
                continue
            action(venue, currency)
        except EOFError:
            console.print("\nInput closed. Shutting down...")
            return


if __name__ == "__main__":
    app()
