"""Shared helpers for CLI commands: formatting, input parsing, sessions."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from finhealth.core.config import AppConfig, load_config
from finhealth.core.exceptions import FinHealthError
from finhealth.core.log import configure_logging
from finhealth.engine.store import FinancialStore
from finhealth.storage.snapshot import JsonFileSnapshotStore

console = Console()

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


def format_currency(amount: Decimal, currency: str = "USD") -> str:
    """Format an amount with its currency symbol and two decimals."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    if amount < 0:
        return f"-{symbol}{abs(amount):,.2f}"
    return f"{symbol}{amount:,.2f}"


def format_percentage(value: Decimal, digits: int = 1) -> str:
    return f"{value:.{digits}f}%"


def parse_amount(value: str | None) -> Decimal:
    """Parse user-entered numeric text, normalizing anything invalid to 0."""
    if value is None:
        return Decimal(0)
    try:
        amount = Decimal(value.strip().replace(",", ""))
    except InvalidOperation:
        return Decimal(0)
    if not amount.is_finite():
        return Decimal(0)
    return amount


def parse_date(value: str | None) -> date:
    """Parse an ISO date, defaulting to today."""
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid date '{value}', expected YYYY-MM-DD")
        raise typer.Exit(1)


def resolve_config(data_dir: Path | None, session: str | None) -> AppConfig:
    """Load config, apply CLI overrides and set up logging."""
    try:
        config = load_config()
    except FinHealthError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    overrides = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if session:
        overrides["session"] = session
    if overrides:
        try:
            config = AppConfig.model_validate({**config.model_dump(), **overrides})
        except ValidationError as e:
            error = e.errors()[0]
            option = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]Error:[/red] Invalid option {option}: {escape(error['msg'])}")
            raise typer.Exit(1)

    configure_logging(config.log_level)
    return config


@contextmanager
def open_store(config: AppConfig) -> Iterator[FinancialStore]:
    """Open the configured session for the duration of a command.

    Any FinHealthError raised while opening, mutating or closing the
    session is reported and turned into exit code 1.
    """
    try:
        with FinancialStore.open(
            config.session,
            JsonFileSnapshotStore(config.data_dir),
            autosave=config.autosave,
        ) as store:
            yield store
    except FinHealthError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def data_dir_option() -> Path | None:
    return typer.Option(
        None,
        "--data-dir",
        "-d",
        envvar="FINHEALTH_DATA_DIR",
        help="Directory holding session snapshots (default: ~/.finhealth)",
    )


def session_option() -> str | None:
    return typer.Option(
        None,
        "--session",
        "-s",
        envvar="FINHEALTH_SESSION",
        help="Session name (default: from config, 'default')",
    )
