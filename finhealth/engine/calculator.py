"""Financial summary and health calculation engine.

Both calculations are pure: the summary depends only on incomes and
expenses, the health only on the summary.
"""

from collections.abc import Iterable
from decimal import Decimal

from finhealth.core.models import (
    Expense,
    ExpenseType,
    FinancialHealth,
    FinancialSummary,
    HealthStatus,
    Income,
)
from finhealth.engine.normalization import expense_monthly_amount, income_monthly_amount

# Share of total income available as the monthly budget.
BUDGET_SHARE = Decimal("0.8")

RECOMMEND_SAVE_20 = "Try to save at least 20% of your income"
RECOMMEND_LOW_SAVINGS = "Your savings rate is low, consider reducing expenses"
RECOMMEND_URGENT_SAVINGS = "Urgent: you need to increase your savings rate"
RECOMMEND_NEAR_BUDGET = "You are close to exceeding your monthly budget"
RECOMMEND_OVER_BUDGET = "You are exceeding your monthly budget"
RECOMMEND_REDUCE_FIXED = "Consider reducing your fixed expenses"
RECOMMEND_FIXED_TOO_HIGH = "Your fixed expenses are too high"
RECOMMEND_NEGATIVE_NET = "Your expenses exceed your income"


def _sum_expenses(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense_monthly_amount(e) for e in expenses), Decimal(0))


def calculate_summary(
    incomes: Iterable[Income],
    expenses: Iterable[Expense],
) -> FinancialSummary:
    """Aggregate incomes and expenses into a monthly summary.

    Args:
        incomes: All incomes.
        expenses: All expenses.

    Returns:
        FinancialSummary with monthly-equivalent totals. savings_rate is 0
        when there is no income; budget_utilization is 0 when the budget
        is 0.
    """
    expenses = list(expenses)

    total_income = sum((income_monthly_amount(i) for i in incomes), Decimal(0))
    total_expenses = _sum_expenses(expenses)
    fixed_expenses = _sum_expenses(e for e in expenses if e.type == ExpenseType.FIXED)
    variable_expenses = _sum_expenses(e for e in expenses if e.type == ExpenseType.VARIABLE)

    net_income = total_income - total_expenses
    savings_rate = net_income / total_income * 100 if total_income > 0 else Decimal(0)
    monthly_budget = total_income * BUDGET_SHARE
    budget_utilization = (
        total_expenses / monthly_budget * 100 if monthly_budget > 0 else Decimal(0)
    )

    return FinancialSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net_income=net_income,
        savings_rate=savings_rate,
        fixed_expenses=fixed_expenses,
        variable_expenses=variable_expenses,
        monthly_budget=monthly_budget,
        budget_utilization=budget_utilization,
    )


def calculate_fixed_ratio(summary: FinancialSummary) -> Decimal:
    """Share of total expenses that is fixed (0.25 = 25%), 0 without expenses."""
    if summary.total_expenses == 0:
        return Decimal(0)
    return summary.fixed_expenses / summary.total_expenses


def score_savings_rate(savings_rate: Decimal) -> tuple[int, str | None]:
    """Points and recommendation for the savings rate factor (max 30)."""
    if savings_rate >= 20:
        return 30, None
    if savings_rate >= 10:
        return 20, RECOMMEND_SAVE_20
    if savings_rate >= 5:
        return 10, RECOMMEND_LOW_SAVINGS
    return 0, RECOMMEND_URGENT_SAVINGS


def score_budget_utilization(budget_utilization: Decimal) -> tuple[int, str | None]:
    """Points and recommendation for the budget utilization factor (max 25)."""
    if budget_utilization <= 80:
        return 25, None
    if budget_utilization <= 100:
        return 15, RECOMMEND_NEAR_BUDGET
    return 5, RECOMMEND_OVER_BUDGET


def score_fixed_ratio(fixed_ratio: Decimal) -> tuple[int, str | None]:
    """Points and recommendation for the fixed-expense ratio factor (max 25)."""
    if fixed_ratio <= Decimal("0.6"):
        return 25, None
    if fixed_ratio <= Decimal("0.8"):
        return 15, RECOMMEND_REDUCE_FIXED
    return 5, RECOMMEND_FIXED_TOO_HIGH


def score_net_income(net_income: Decimal) -> tuple[int, str | None]:
    """Points and recommendation for the net income factor (max 20)."""
    if net_income > 0:
        return 20, None
    return 0, RECOMMEND_NEGATIVE_NET


def health_status_for(score: int) -> HealthStatus:
    """Map a score to its tier. Boundary values go to the higher tier."""
    if score >= 80:
        return HealthStatus.EXCELLENT
    if score >= 60:
        return HealthStatus.GOOD
    if score >= 40:
        return HealthStatus.FAIR
    return HealthStatus.POOR


def calculate_health(summary: FinancialSummary) -> FinancialHealth:
    """Score a summary from 0 to 100 and collect recommendations.

    Four independent factors are added up: savings rate, budget
    utilization, fixed-expense ratio and the sign of net income.
    Recommendations follow that evaluation order; satisfied factors
    contribute none.

    Args:
        summary: Summary to evaluate.

    Returns:
        FinancialHealth with score, status tier and recommendations.
    """
    factors = (
        score_savings_rate(summary.savings_rate),
        score_budget_utilization(summary.budget_utilization),
        score_fixed_ratio(calculate_fixed_ratio(summary)),
        score_net_income(summary.net_income),
    )

    score = sum(points for points, _ in factors)
    recommendations = tuple(message for _, message in factors if message is not None)

    return FinancialHealth(
        score=score,
        status=health_status_for(score),
        recommendations=recommendations,
    )
