"""FinHealth command-line entry point."""

import typer

from finhealth import __version__
from finhealth.cli.cards import card_app
from finhealth.cli.goals import goal_app
from finhealth.cli.records import expense_app, income_app
from finhealth.cli.session_cmd import session_app
from finhealth.cli.status import status_command

app = typer.Typer(
    name="finhealth",
    help="Track incomes, expenses, cards and goals; score your financial health.",
    no_args_is_help=True,
)

app.command(name="status")(status_command)
app.add_typer(income_app, name="income")
app.add_typer(expense_app, name="expense")
app.add_typer(card_app, name="card")
app.add_typer(goal_app, name="goal")
app.add_typer(session_app, name="session")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"finhealth {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """FinHealth: personal finance tracking."""


if __name__ == "__main__":
    app()
