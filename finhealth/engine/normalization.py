"""Monthly normalization of recurring amounts.

The factors are a policy choice, not a calendar conversion: a month is
4.33 weeks or 30 days. Aggregates depend on these exact constants.
"""

from decimal import Decimal

from finhealth.core.models import Expense, ExpenseFrequency, Income, IncomeFrequency

WEEKS_PER_MONTH = Decimal("4.33")
DAYS_PER_MONTH = Decimal(30)

_FACTORS: dict[str, Decimal] = {
    "monthly": Decimal(1),
    "weekly": WEEKS_PER_MONTH,
    "daily": DAYS_PER_MONTH,
}


def monthly_equivalent(
    amount: Decimal,
    frequency: IncomeFrequency | ExpenseFrequency | str | None,
) -> Decimal:
    """Convert an amount with the given recurrence to a monthly figure.

    Args:
        amount: Recurrence-native amount.
        frequency: monthly, weekly or daily. Anything else (one-time,
            None) is treated as already monthly-scale.

    Returns:
        Monthly-equivalent amount.
    """
    key = frequency.value if isinstance(frequency, (IncomeFrequency, ExpenseFrequency)) else frequency
    return amount * _FACTORS.get(key, Decimal(1))


def income_monthly_amount(income: Income) -> Decimal:
    """Monthly-equivalent amount of an income."""
    return monthly_equivalent(income.amount, income.frequency)


def expense_monthly_amount(expense: Expense) -> Decimal:
    """Monthly-equivalent amount of an expense.

    Non-recurring expenses count at face value once, whatever their
    frequency field says.
    """
    if not expense.is_recurring:
        return expense.amount
    return monthly_equivalent(expense.amount, expense.frequency)
