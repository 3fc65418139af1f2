"""Implementation of 'finhealth session' commands.

Inspect or clear a stored session snapshot.
"""

from pathlib import Path

import typer

from finhealth.cli.utils import console, data_dir_option, resolve_config, session_option
from finhealth.core.exceptions import FinHealthError
from finhealth.storage.snapshot import JsonFileSnapshotStore

session_app = typer.Typer(help="Manage stored sessions")


@session_app.command(name="show")
def session_show(
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Show record counts in the stored session."""
    config = resolve_config(data_dir, session)
    snapshots = JsonFileSnapshotStore(config.data_dir)
    try:
        state = snapshots.load(config.session)
    except FinHealthError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if state is None:
        console.print(f"[yellow]No stored data for session '{config.session}'[/yellow]")
        raise typer.Exit(0)

    console.print(f"Session [cyan]{config.session}[/cyan] ({snapshots.path_for(config.session)})")
    console.print(f"  Incomes:            [cyan]{len(state.incomes)}[/cyan]")
    console.print(f"  Expenses:           [cyan]{len(state.expenses)}[/cyan]")
    console.print(f"  Categories:         [cyan]{len(state.categories)}[/cyan]")
    console.print(f"  Cards:              [cyan]{len(state.credit_cards)}[/cyan]")
    console.print(f"  Card transactions:  [cyan]{len(state.card_transactions)}[/cyan]")
    console.print(f"  Goals:              [cyan]{len(state.financial_goals)}[/cyan]")
    console.print(f"  Contributions:      [cyan]{len(state.goal_contributions)}[/cyan]")


@session_app.command(name="clear")
def session_clear(
    confirm: bool = typer.Option(
        False,
        "--confirm",
        "-y",
        help="Confirm deletion (required)",
    ),
    data_dir: Path = data_dir_option(),
    session: str = session_option(),
) -> None:
    """Delete all stored data of a session.

    Requires --confirm flag to execute.
    """
    config = resolve_config(data_dir, session)
    snapshots = JsonFileSnapshotStore(config.data_dir)

    if not snapshots.path_for(config.session).exists():
        console.print("[yellow]Session is already empty[/yellow]")
        raise typer.Exit(0)

    if not confirm:
        console.print()
        console.print(f"[yellow]This will delete ALL data of session '{config.session}'![/yellow]")
        console.print("Run with [bold]--confirm[/bold] to proceed")
        raise typer.Exit(0)

    snapshots.delete(config.session)
    console.print(f"[green]Deleted:[/green] session '{config.session}'")
