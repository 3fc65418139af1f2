"""Implementation of 'finhealth status' command.

Shows the monthly summary, the health score and its recommendations.
"""

from pathlib import Path

from rich.panel import Panel

from finhealth.cli.utils import (
    console,
    data_dir_option,
    format_currency,
    format_percentage,
    open_store,
    resolve_config,
    session_option,
)
from finhealth.core.models import HealthStatus
from finhealth.engine.calculator import calculate_fixed_ratio

STATUS_STYLES = {
    HealthStatus.EXCELLENT: "green",
    HealthStatus.GOOD: "blue",
    HealthStatus.FAIR: "yellow",
    HealthStatus.POOR: "red",
}


def status_command(
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Show the monthly summary and financial health.

    All amounts are monthly equivalents: weekly amounts count 4.33
    times, daily amounts 30 times.
    """
    config = resolve_config(data_dir, session)
    currency = config.currency

    with open_store(config) as store:
        summary = store.summary
        health = store.health

    console.print()
    console.print(Panel(f"[bold]Financial status: {config.session}[/bold]", style="cyan"))
    console.print()

    console.print("[bold]Income & Expenses (monthly)[/bold]")
    console.print(f"  Income:            {format_currency(summary.total_income, currency):>12}")
    console.print(f"  Expenses:          {format_currency(summary.total_expenses, currency):>12}")
    console.print(f"    Fixed:           {format_currency(summary.fixed_expenses, currency):>12}")
    console.print(f"    Variable:        {format_currency(summary.variable_expenses, currency):>12}")
    if summary.net_income >= 0:
        console.print(f"  [green]Net income:        {format_currency(summary.net_income, currency):>12}[/green]")
    else:
        console.print(f"  [red]Net income:        {format_currency(summary.net_income, currency):>12}[/red]")
    console.print()

    console.print("[bold]Budget[/bold]")
    console.print(f"  Monthly budget:    {format_currency(summary.monthly_budget, currency):>12}")
    console.print(f"  Utilization:       {format_percentage(summary.budget_utilization):>12}")
    console.print(f"  Savings rate:      {format_percentage(summary.savings_rate):>12}")
    console.print(f"  Fixed share:       {format_percentage(calculate_fixed_ratio(summary) * 100):>12}")
    console.print()

    style = STATUS_STYLES[health.status]
    console.print("[bold]Financial Health[/bold]")
    console.print(f"  Score: [{style}]{health.score}/100 ({health.status.value})[/{style}]")

    if health.recommendations:
        console.print()
        console.print("[bold yellow]⚠ Recommendations[/bold yellow]")
        for recommendation in health.recommendations:
            console.print(f"  - {recommendation}")
    console.print()
