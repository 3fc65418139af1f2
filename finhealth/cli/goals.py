"""Implementation of 'finhealth goal' commands."""

from datetime import date
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
from finhealth.core.models import GoalCategory, GoalPriority, GoalStatus, RecordKind
from finhealth.engine.goals import calculate_goals_overview, days_until_target, months_to_goal

goal_app = typer.Typer(help="Manage savings goals")


@goal_app.command(name="add")
def goal_add(
    name: str = typer.Argument(..., help="Goal name"),
    target: str = typer.Argument(..., help="Target amount"),
    target_date: str = typer.Argument(..., help="Target date (YYYY-MM-DD)"),
    category: GoalCategory = typer.Option(GoalCategory.SAVINGS, "--category", "-c"),
    priority: GoalPriority = typer.Option(GoalPriority.MEDIUM, "--priority", "-p"),
    monthly: str = typer.Option(None, "--monthly", "-m", help="Planned monthly contribution"),
    description: str = typer.Option("", "--description", help="Optional note"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Add a savings goal."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        goal = store.add_financial_goal(
            name=name,
            description=description,
            target_amount=parse_amount(target),
            start_date=date.today(),
            target_date=parse_date(target_date),
            category=category,
            priority=priority,
            monthly_contribution=parse_amount(monthly) if monthly else None,
        )

    console.print(f"[green]Added goal[/green] {goal.name} ({goal.id})")


@goal_app.command(name="contribute")
def goal_contribute(
    goal_id: str = typer.Argument(..., help="Goal id"),
    amount: str = typer.Argument(..., help="Contribution amount"),
    on: str = typer.Option(None, "--date", help="Date (YYYY-MM-DD, default: today)"),
    description: str = typer.Option(None, "--description", help="Optional note"),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Add a contribution to a goal and show its progress."""
    config = resolve_config(data_dir, session)
    with open_store(config) as store:
        if store.get(RecordKind.FINANCIAL_GOAL, goal_id) is None:
            console.print(f"[red]Error:[/red] No goal with id {goal_id}")
            raise typer.Exit(1)
        store.add_goal_contribution(
            goal_id=goal_id,
            amount=parse_amount(amount),
            date=parse_date(on),
            description=description,
        )
        goal = store.get(RecordKind.FINANCIAL_GOAL, goal_id)

    console.print(
        f"{goal.name}: {format_currency(goal.current_amount, config.currency)} of "
        f"{format_currency(goal.target_amount, config.currency)} ({format_percentage(goal.progress)})"
    )
    if goal.status == GoalStatus.COMPLETED:
        console.print("[green]✓ Goal completed![/green]")


@goal_app.command(name="list")
def goal_list(
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """List goals with progress and time left."""
    config = resolve_config(data_dir, session)
    currency = config.currency
    with open_store(config) as store:
        goals = store.financial_goals

    if not goals:
        console.print("[yellow]No goals registered[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Goals")
    table.add_column("ID", style="dim")
    table.add_column("Goal")
    table.add_column("Status")
    table.add_column("Saved", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Days left", justify="right")
    table.add_column("Months needed", justify="right")

    for goal in goals:
        table.add_row(
            goal.id,
            goal.name,
            goal.status.value,
            format_currency(goal.current_amount, currency),
            format_currency(goal.target_amount, currency),
            format_percentage(goal.progress),
            str(days_until_target(goal)),
            str(months_to_goal(goal.target_amount, goal.current_amount, goal.monthly_contribution)),
        )

    overview = calculate_goals_overview(goals)
    console.print(table)
    console.print(
        f"{overview.active_goals} active, {overview.completed_goals} completed of "
        f"{overview.total_goals} goals; overall {format_percentage(overview.overall_progress)}"
    )
