"""Tests for the finhealth command-line interface."""

from decimal import Decimal

import pytest
from typer.testing import CliRunner

from finhealth.cli.main import app
from finhealth.cli.utils import format_currency, format_percentage, parse_amount
from finhealth.storage.snapshot import JsonFileSnapshotStore

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


def invoke(data_dir, *args):
    return runner.invoke(app, [*args, "--data-dir", str(data_dir)])


def load_state(data_dir, session: str = "default"):
    return JsonFileSnapshotStore(data_dir).load(session)


class TestFormatting:
    """Tests for currency and percentage formatting."""

    def test_format_currency(self) -> None:
        """Test symbol lookup, thousands separators and negative amounts."""
        assert format_currency(Decimal("1234.5"), "USD") == "$1,234.50"
        assert format_currency(Decimal("-20"), "EUR") == "-€20.00"
        assert format_currency(Decimal("3"), "RSD") == "RSD 3.00"

    def test_format_percentage(self) -> None:
        """Test rounding to the requested number of digits."""
        assert format_percentage(Decimal("85.5666")) == "85.6%"
        assert format_percentage(Decimal("18.0416"), digits=2) == "18.04%"


class TestParseAmount:
    """Invalid numeric input is normalized to 0 at the boundary."""

    def test_valid(self) -> None:
        """Test that thousands separators are accepted."""
        assert parse_amount("1,250.75") == Decimal("1250.75")

    @pytest.mark.parametrize("value", [None, "", "abc", "NaN", "Infinity"])
    def test_invalid_becomes_zero(self, value) -> None:
        """Test that missing, non-numeric and non-finite input become 0."""
        assert parse_amount(value) == 0


class TestIncomeExpenseCommands:
    """Tests for 'income' and 'expense' subcommands."""

    def test_add_income(self, data_dir) -> None:
        """Test that an added income is stored and summarized."""
        result = invoke(data_dir, "income", "add", "Salary", "3000")

        assert result.exit_code == 0
        assert "Added income" in result.output
        state = load_state(data_dir)
        assert state.incomes[0].amount == Decimal(3000)
        assert state.summary.total_income == Decimal(3000)

    def test_invalid_amount_recorded_as_zero(self, data_dir) -> None:
        """Test that a non-numeric amount is stored as 0."""
        result = invoke(data_dir, "income", "add", "Gift", "lots")

        assert result.exit_code == 0
        assert load_state(data_dir).incomes[0].amount == 0

    def test_add_recurring_expense(self, data_dir) -> None:
        """Test that --frequency makes the expense recurring and normalized."""
        result = invoke(
            data_dir, "expense", "add", "Gym", "100", "--type", "fixed", "--frequency", "weekly"
        )

        assert result.exit_code == 0
        expense = load_state(data_dir).expenses[0]
        assert expense.is_recurring is True
        assert load_state(data_dir).summary.fixed_expenses == Decimal(433)

    def test_invalid_date(self, data_dir) -> None:
        """Test that a malformed date exits with an error."""
        result = invoke(data_dir, "expense", "add", "Lunch", "12", "--date", "yesterday")
        assert result.exit_code == 1
        assert "Invalid date" in result.output

    def test_delete_income(self, data_dir) -> None:
        """Test deleting an income by id."""
        invoke(data_dir, "income", "add", "Salary", "3000")
        income_id = load_state(data_dir).incomes[0].id

        result = invoke(data_dir, "income", "delete", income_id)

        assert result.exit_code == 0
        assert load_state(data_dir).incomes == ()

    def test_delete_unknown_expense(self, data_dir) -> None:
        """Test that deleting an unknown id only warns."""
        result = invoke(data_dir, "expense", "delete", "missing")
        assert result.exit_code == 0
        assert "No expense" in result.output


class TestStatusCommand:
    """Tests for 'status' command."""

    def test_empty_session(self, data_dir) -> None:
        """Test the neutral score of a session without data."""
        result = invoke(data_dir, "status")

        assert result.exit_code == 0
        assert "50/100" in result.output

    def test_status_with_data(self, data_dir) -> None:
        """Test score, totals and recommendations after adding records."""
        invoke(data_dir, "income", "add", "Salary", "3000")
        invoke(data_dir, "expense", "add", "Gym", "100", "--type", "fixed", "--frequency", "weekly")

        result = invoke(data_dir, "status")

        assert result.exit_code == 0
        assert "80/100" in result.output
        assert "$3,000.00" in result.output
        assert "Your fixed expenses are too high" in result.output

    def test_status_writes_nothing(self, data_dir) -> None:
        """Test that a read-only command leaves no snapshot behind."""
        result = invoke(data_dir, "status", "--session", "typo")

        assert result.exit_code == 0
        assert load_state(data_dir, "typo") is None
        assert not (data_dir / "typo.json").exists()

    def test_sessions_are_isolated(self, data_dir) -> None:
        """Test that data added to one session stays out of another."""
        invoke(data_dir, "income", "add", "Salary", "3000", "--session", "work")

        assert load_state(data_dir, "work") is not None
        assert load_state(data_dir) is None


class TestErrorHandling:
    """Failures are reported as an error line with exit code 1."""

    def test_unwritable_data_dir(self, tmp_path) -> None:
        """Test that a data dir pointing at a regular file reports the save failure."""
        not_a_dir = tmp_path / "occupied"
        not_a_dir.write_text("x", encoding="utf-8")

        result = invoke(not_a_dir, "income", "add", "Salary", "3000")

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_invalid_session_name(self, data_dir) -> None:
        """Test that a session name with spaces is rejected."""
        result = invoke(data_dir, "status", "--session", "my session")

        assert result.exit_code == 1
        assert "Invalid option" in result.output
        assert not data_dir.exists()

    def test_invalid_session_from_env(self, data_dir) -> None:
        """Test that FINHEALTH_SESSION is validated like --session."""
        result = runner.invoke(
            app,
            ["status", "--data-dir", str(data_dir)],
            env={"FINHEALTH_SESSION": "a/b"},
        )

        assert result.exit_code == 1
        assert "Invalid option" in result.output

    def test_corrupt_snapshot(self, data_dir) -> None:
        """Test that an unreadable snapshot is reported."""
        data_dir.mkdir(parents=True)
        (data_dir / "default.json").write_text("garbage", encoding="utf-8")

        result = invoke(data_dir, "status")

        assert result.exit_code == 1
        assert "Error" in result.output


class TestCardCommands:
    """Tests for 'card' subcommands."""

    def test_add_charge_and_list(self, data_dir) -> None:
        """Test adding a card, charging it and listing utilization."""
        invoke(data_dir, "card", "add", "Visa", "Bank", "--limit", "1000", "--balance", "250")
        card = load_state(data_dir).credit_cards[0]
        assert card.available_credit == Decimal(750)

        charge = invoke(data_dir, "card", "charge", card.id, "Books", "40")
        listing = invoke(data_dir, "card", "list")

        assert charge.exit_code == 0
        assert load_state(data_dir).card_transactions[0].card_id == card.id
        assert listing.exit_code == 0
        assert "25.0%" in listing.output

    def test_charge_unknown_card(self, data_dir) -> None:
        """Test that charging an unknown card fails."""
        result = invoke(data_dir, "card", "charge", "nope", "Books", "40")
        assert result.exit_code == 1
        assert "No card" in result.output

    def test_delete_card_cascades(self, data_dir) -> None:
        """Test that deleting a card removes its transactions."""
        invoke(data_dir, "card", "add", "Visa", "Bank")
        card_id = load_state(data_dir).credit_cards[0].id
        invoke(data_dir, "card", "charge", card_id, "Books", "40")

        result = invoke(data_dir, "card", "delete", card_id)

        assert result.exit_code == 0
        state = load_state(data_dir)
        assert state.credit_cards == ()
        assert state.card_transactions == ()


class TestGoalCommands:
    """Tests for 'goal' subcommands."""

    def test_contribute_until_completed(self, data_dir) -> None:
        """Test that contributions advance progress up to completion."""
        invoke(data_dir, "goal", "add", "Trip", "1000", "2030-01-01")
        goal_id = load_state(data_dir).financial_goals[0].id

        first = invoke(data_dir, "goal", "contribute", goal_id, "250")
        second = invoke(data_dir, "goal", "contribute", goal_id, "1250")

        assert "25.0%" in first.output
        assert "Goal completed" in second.output
        goal = load_state(data_dir).financial_goals[0]
        assert goal.progress == Decimal(100)
        assert goal.status.value == "completed"

    def test_contribute_unknown_goal(self, data_dir) -> None:
        """Test that contributing to an unknown goal fails."""
        result = invoke(data_dir, "goal", "contribute", "nope", "10")
        assert result.exit_code == 1

    def test_list(self, data_dir) -> None:
        """Test the goals overview line."""
        invoke(data_dir, "goal", "add", "Trip", "1000", "2030-01-01", "--monthly", "100")
        result = invoke(data_dir, "goal", "list")
        assert result.exit_code == 0
        assert "1 active, 0 completed of 1 goals" in result.output


class TestSessionCommands:
    """Tests for 'session' subcommands."""

    def test_clear_requires_confirm(self, data_dir) -> None:
        """Test that clear without --confirm keeps the data."""
        invoke(data_dir, "income", "add", "Salary", "3000")

        result = invoke(data_dir, "session", "clear")

        assert result.exit_code == 0
        assert "--confirm" in result.output
        assert load_state(data_dir) is not None

    def test_clear(self, data_dir) -> None:
        """Test that clear --confirm deletes the snapshot."""
        invoke(data_dir, "income", "add", "Salary", "3000")

        result = invoke(data_dir, "session", "clear", "--confirm")

        assert result.exit_code == 0
        assert load_state(data_dir) is None

    def test_show(self, data_dir) -> None:
        """Test record counts of a stored session."""
        invoke(data_dir, "income", "add", "Salary", "3000")
        result = invoke(data_dir, "session", "show")
        assert result.exit_code == 0
        assert "Incomes" in result.output


def test_version() -> None:
    """Test --version output."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "finhealth" in result.output
