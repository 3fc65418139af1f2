"""Implementation of 'finhealth card' commands."""

from pathlib import Path

import typer
from rich.table import Table

from finhealth.cli.utils import (
    console,
    data_dir_option,
    format_currency,
    format_percentage,
    open_store,
    parse_amount,
    parse_date,
    resolve_config,
    session_option,
)
from finhealth.core.models import CardTransactionType, CardType, RecordKind
from finhealth.engine.cards import (
    calculate_cards_overview,
    card_utilization,
    days_until_cut_off,
    days_until_due,
)

card_app = typer.Typer(help="Manage credit and debit cards")


def _utilization_style(percentage) -> str:
    if percentage >= 80:
        return "red"
    if percentage >= 60:
        return "yellow"
    return "green"


@card_app.command(name="add")
def card_add(
    name: str = typer.Argument(..., help="Card name"),
    bank: str = typer.Argument(..., help="Issuing bank"),
    limit: str = typer.Option("0", "--limit", "-l", help="Credit limit"),
    balance: str = typer.Option("0", "--balance", "-b", help="Current balance"),
    cut_off: int = typer.Option(1, "--cut-off", min=1, max=31, help="Cut-off day of month"),
    due: int = typer.Option(15, "--due", min=1, max=31, help="Payment due day of month"),
    interest: str = typer.Option("0", "--interest", help="Interest rate (%)"),
    card_type: CardType = typer.Option(CardType.CREDIT, "--type", "-t", help="Credit or debit"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Add a card. Available credit is limit minus balance."""
    config = resolve_config(data_dir, session)
    card_limit = parse_amount(limit)
    current_balance = parse_amount(balance)

    with open_store(config) as store:
        card = store.add_credit_card(
            name=name,
            bank=bank,
            type=card_type,
            limit=card_limit,
            current_balance=current_balance,
            available_credit=card_limit - current_balance,
            cut_off_date=cut_off,
            due_date=due,
            interest_rate=parse_amount(interest),
        )

    console.print(f"[green]Added card[/green] {card.name} ({card.id})")


@card_app.command(name="charge")
def card_charge(
    card_id: str = typer.Argument(..., help="Card id"),
    description: str = typer.Argument(..., help="What the transaction was"),
    amount: str = typer.Argument(..., help="Transaction amount"),
    tx_type: CardTransactionType = typer.Option(
        CardTransactionType.PURCHASE, "--type", "-t", help="Transaction type"
    ),
    category: str = typer.Option("Otros", "--category", "-c", help="Category name"),
    installments: int = typer.Option(None, "--installments", min=1, help="Number of installments"),
    on: str = typer.Option(None, "--date", help="Date (YYYY-MM-DD, default: today)"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Record a transaction on a card."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        if store.get(RecordKind.CREDIT_CARD, card_id) is None:
            console.print(f"[red]Error:[/red] No card with id {card_id}")
            raise typer.Exit(1)
        tx = store.add_card_transaction(
            card_id=card_id,
            description=description,
            amount=parse_amount(amount),
            type=tx_type,
            date=parse_date(on),
            category=category,
            installments=installments,
            current_installment=1 if installments else None,
        )

    console.print(f"[green]Recorded {tx.type.value}[/green] {tx.description} ({tx.id})")


@card_app.command(name="delete")
def card_delete(
    card_id: str = typer.Argument(..., help="Card id"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Delete a card together with its transactions."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        if store.get(RecordKind.CREDIT_CARD, card_id) is None:
            console.print(f"[yellow]No card with id {card_id}[/yellow]")
            raise typer.Exit(0)
        store.delete_credit_card(card_id)

    console.print(f"[green]Deleted card[/green] {card_id} and its transactions")


@card_app.command(name="list")
def card_list(
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """List cards with utilization and upcoming dates."""
    config = resolve_config(data_dir, session)
    currency = config.currency
    with open_store(config) as store:
        cards = store.credit_cards
        overview = calculate_cards_overview(cards, store.card_transactions)

    if not cards:
        console.print("[yellow]No cards registered[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Cards")
    table.add_column("ID", style="dim")
    table.add_column("Card")
    table.add_column("Balance", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Used", justify="right")
    table.add_column("Cut-off in", justify="right")
    table.add_column("Due in", justify="right")

    for card in cards:
        utilization = card_utilization(card)
        style = _utilization_style(utilization)
        table.add_row(
            card.id,
            f"{card.name} ({card.bank})",
            format_currency(card.current_balance, currency),
            format_currency(card.limit, currency),
            f"[{style}]{format_percentage(utilization)}[/{style}]",
            f"{days_until_cut_off(card)} days",
            f"{days_until_due(card)} days",
        )

    console.print(table)
    console.print(f"Total limit:     {format_currency(overview.total_limit, currency):>12}")
    console.print(f"Total balance:   {format_currency(overview.total_balance, currency):>12}")
    console.print(f"Available:       {format_currency(overview.total_available, currency):>12}")
    console.print(f"Utilization:     {format_percentage(overview.overall_utilization):>12}")
