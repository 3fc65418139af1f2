"""Implementation of 'finhealth income' and 'finhealth expense' commands."""

from pathlib import Path

import typer

from finhealth.cli.utils import (
    console,
    data_dir_option,
    format_currency,
    open_store,
    parse_amount,
    parse_date,
    resolve_config,
    session_option,
)
from finhealth.core.models import ExpenseFrequency, ExpenseType, IncomeFrequency

income_app = typer.Typer(help="Manage incomes")
expense_app = typer.Typer(help="Manage expenses")


@income_app.command(name="add")
def income_add(
    name: str = typer.Argument(..., help="Income name"),
    amount: str = typer.Argument(..., help="Amount per occurrence"),
    frequency: IncomeFrequency = typer.Option(
        IncomeFrequency.MONTHLY, "--frequency", "-f", help="How often it is received"
    ),
    category: str = typer.Option("Salario", "--category", "-c", help="Category name"),
    on: str = typer.Option(None, "--date", help="Date (YYYY-MM-DD, default: today)"),
    description: str = typer.Option(None, "--description", help="Optional note"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Add an income. Invalid amounts are recorded as 0."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        income = store.add_income(
            name=name,
            amount=parse_amount(amount),
            frequency=frequency,
            category=category,
            date=parse_date(on),
            description=description,
        )
        total = store.summary.total_income

    console.print(f"[green]Added income[/green] {income.name} ({income.id})")
    console.print(f"Monthly income: {format_currency(total, config.currency)}")


@income_app.command(name="delete")
def income_delete(
    income_id: str = typer.Argument(..., help="Income id"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Delete an income by id."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        before = len(store.incomes)
        store.delete_income(income_id)
        removed = before - len(store.incomes)

    if removed:
        console.print(f"[green]Deleted income[/green] {income_id}")
    else:
        console.print(f"[yellow]No income with id {income_id}[/yellow]")


@expense_app.command(name="add")
def expense_add(
    name: str = typer.Argument(..., help="Expense name"),
    amount: str = typer.Argument(..., help="Amount per occurrence"),
    expense_type: ExpenseType = typer.Option(
        ExpenseType.VARIABLE, "--type", "-t", help="Fixed or variable"
    ),
    frequency: ExpenseFrequency = typer.Option(
        None, "--frequency", "-f", help="Recurrence; makes the expense recurring"
    ),
    category: str = typer.Option("Alimentación", "--category", "-c", help="Category name"),
    on: str = typer.Option(None, "--date", help="Date (YYYY-MM-DD, default: today)"),
    description: str = typer.Option(None, "--description", help="Optional note"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Add an expense. Without --frequency it counts once at face value."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        expense = store.add_expense(
            name=name,
            amount=parse_amount(amount),
            type=expense_type,
            category=category,
            date=parse_date(on),
            description=description,
            is_recurring=frequency is not None,
            frequency=frequency,
        )
        total = store.summary.total_expenses

    console.print(f"[green]Added expense[/green] {expense.name} ({expense.id})")
    console.print(f"Monthly expenses: {format_currency(total, config.currency)}")


@expense_app.command(name="delete")
def expense_delete(
    expense_id: str = typer.Argument(..., help="Expense id"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Delete an expense by id."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        before = len(store.expenses)
        store.delete_expense(expense_id)
        removed = before - len(store.expenses)

    if removed:
        console.print(f"[green]Deleted expense[/green] {expense_id}")
    else:
        console.print(f"[yellow]No expense with id {expense_id}[/yellow]")
