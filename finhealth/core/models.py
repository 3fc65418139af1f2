"""Domain models for FinHealth.

All records and derived state are defined here using Pydantic v2.
Records are frozen: a mutation always produces a new instance.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class RecordKind(str, Enum):
    """Collections held by the financial state."""

    INCOME = "income"
    EXPENSE = "expense"
    CATEGORY = "category"
    CREDIT_CARD = "credit_card"
    CARD_TRANSACTION = "card_transaction"
    FINANCIAL_GOAL = "financial_goal"
    GOAL_CONTRIBUTION = "goal_contribution"


class IncomeFrequency(str, Enum):
    """Recurrence of an income amount."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"
    ONE_TIME = "one-time"


class ExpenseFrequency(str, Enum):
    """Recurrence of a recurring expense amount."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"


class ExpenseType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


class CategoryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class CardType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"


class CardTransactionType(str, Enum):
    PURCHASE = "purchase"
    PAYMENT = "payment"
    FEE = "fee"
    INTEREST = "interest"


class GoalCategory(str, Enum):
    SAVINGS = "savings"
    INVESTMENT = "investment"
    PURCHASE = "purchase"
    DEBT = "debt"
    EMERGENCY = "emergency"
    VACATION = "vacation"
    EDUCATION = "education"
    OTHER = "other"


class GoalPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalStatus(str, Enum):
    """Lifecycle of a financial goal.

    COMPLETED is set automatically once progress reaches 100 and is
    never reverted automatically.
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class HealthStatus(str, Enum):
    """Tier derived from the health score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class Record(BaseModel):
    """Base for every stored record: immutable and keyed by id."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)


# -----------------------------------------------------------------------------
# Income & Expense Records
# -----------------------------------------------------------------------------


class Income(Record):
    """An income source.

    Attributes:
        amount: Recurrence-native amount (not pre-normalized to a month).
        frequency: How often the amount is received.
    """

    name: str
    amount: Decimal
    frequency: IncomeFrequency = IncomeFrequency.MONTHLY
    category: str
    date: date
    description: str | None = None


class Expense(Record):
    """An expense, fixed or variable.

    frequency is only meaningful when is_recurring is True; a
    non-recurring expense counts at face value.
    """

    name: str
    amount: Decimal
    type: ExpenseType
    category: str
    date: date
    description: str | None = None
    is_recurring: bool = False
    frequency: ExpenseFrequency | None = None


class Category(Record):
    name: str = Field(min_length=1)
    type: CategoryType
    color: str
    icon: str


# -----------------------------------------------------------------------------
# Cards
# -----------------------------------------------------------------------------


class CreditCard(Record):
    """A credit or debit card.

    available_credit is computed by the caller (limit - current_balance)
    and is not re-derived by the store.
    """

    name: str
    bank: str
    type: CardType = CardType.CREDIT
    limit: Decimal = Decimal(0)
    current_balance: Decimal = Decimal(0)
    available_credit: Decimal = Decimal(0)
    cut_off_date: Annotated[int, Field(ge=1, le=31)]
    due_date: Annotated[int, Field(ge=1, le=31)]
    interest_rate: Decimal = Decimal(0)
    color: str = "#3B82F6"
    icon: str = "💳"
    is_active: bool = True
    description: str | None = None


class CardTransaction(Record):
    card_id: str
    description: str
    amount: Decimal
    type: CardTransactionType = CardTransactionType.PURCHASE
    date: date
    category: str
    installments: int | None = None
    current_installment: int | None = None


# -----------------------------------------------------------------------------
# Goals
# -----------------------------------------------------------------------------


class FinancialGoal(Record):
    """A savings goal.

    current_amount and progress are derived from contributions; progress
    always stays within [0, 100].
    """

    name: str
    description: str = ""
    target_amount: Decimal
    current_amount: Decimal = Decimal(0)
    start_date: date
    target_date: date
    category: GoalCategory = GoalCategory.SAVINGS
    priority: GoalPriority = GoalPriority.MEDIUM
    status: GoalStatus = GoalStatus.ACTIVE
    color: str = "#10B981"
    icon: str = "🎯"
    monthly_contribution: Decimal | None = None
    progress: Annotated[Decimal, Field(ge=0, le=100)] = Decimal(0)


class GoalContribution(Record):
    goal_id: str
    amount: Decimal
    date: date
    description: str | None = None


# -----------------------------------------------------------------------------
# Derived State
# -----------------------------------------------------------------------------


class FinancialSummary(BaseModel):
    """Monthly-equivalent aggregates of incomes and expenses.

    No clamping: savings_rate may be negative and budget_utilization may
    exceed 100.
    """

    model_config = ConfigDict(frozen=True)

    total_income: Decimal = Decimal(0)
    total_expenses: Decimal = Decimal(0)
    net_income: Decimal = Decimal(0)
    savings_rate: Decimal = Decimal(0)
    fixed_expenses: Decimal = Decimal(0)
    variable_expenses: Decimal = Decimal(0)
    monthly_budget: Decimal = Decimal(0)
    budget_utilization: Decimal = Decimal(0)


class FinancialHealth(BaseModel):
    """Heuristic health score with ordered recommendations."""

    model_config = ConfigDict(frozen=True)

    score: Annotated[int, Field(ge=0, le=100)] = 0
    status: HealthStatus = HealthStatus.POOR
    recommendations: tuple[str, ...] = ()


class CardsOverview(BaseModel):
    """Totals across all cards for the cards dashboard."""

    model_config = ConfigDict(frozen=True)

    total_limit: Decimal = Decimal(0)
    total_balance: Decimal = Decimal(0)
    total_available: Decimal = Decimal(0)
    overall_utilization: Decimal = Decimal(0)
    transactions_by_card: dict[str, Decimal] = Field(default_factory=dict)


class GoalsOverview(BaseModel):
    """Totals across all goals for the goals dashboard."""

    model_config = ConfigDict(frozen=True)

    total_goals: int = 0
    active_goals: int = 0
    completed_goals: int = 0
    total_target: Decimal = Decimal(0)
    total_current: Decimal = Decimal(0)
    overall_progress: Decimal = Decimal(0)


# -----------------------------------------------------------------------------
# Snapshot
# -----------------------------------------------------------------------------


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="Salario", type=CategoryType.INCOME, color="#10B981", icon="💰"),
    Category(id="2", name="Freelance", type=CategoryType.INCOME, color="#3B82F6", icon="💼"),
    Category(id="3", name="Inversiones", type=CategoryType.INCOME, color="#8B5CF6", icon="📈"),
    Category(id="4", name="Vivienda", type=CategoryType.EXPENSE, color="#EF4444", icon="🏠"),
    Category(id="5", name="Alimentación", type=CategoryType.EXPENSE, color="#F59E0B", icon="🍽️"),
    Category(id="6", name="Transporte", type=CategoryType.EXPENSE, color="#06B6D4", icon="🚗"),
    Category(id="7", name="Entretenimiento", type=CategoryType.EXPENSE, color="#EC4899", icon="🎮"),
    Category(id="8", name="Salud", type=CategoryType.EXPENSE, color="#84CC16", icon="🏥"),
)


class FinancialState(BaseModel):
    """Complete snapshot of a session's financial data.

    Collections are ordered by insertion. summary and health are derived
    and must only be produced by the engine, never set by a caller.
    This is also the persisted shape.
    """

    model_config = ConfigDict(frozen=True)

    incomes: tuple[Income, ...] = ()
    expenses: tuple[Expense, ...] = ()
    categories: tuple[Category, ...] = DEFAULT_CATEGORIES
    credit_cards: tuple[CreditCard, ...] = ()
    card_transactions: tuple[CardTransaction, ...] = ()
    financial_goals: tuple[FinancialGoal, ...] = ()
    goal_contributions: tuple[GoalContribution, ...] = ()

    summary: FinancialSummary = Field(default_factory=FinancialSummary)
    health: FinancialHealth = Field(default_factory=FinancialHealth)

    @classmethod
    def initial(cls) -> "FinancialState":
        """Fresh state with seeded categories and consistent derived state."""
        from finhealth.engine.reducer import recompute_derived

        return recompute_derived(cls())

    def collection(self, kind: RecordKind) -> tuple[Record, ...]:
        """Return the collection holding records of the given kind."""
        return getattr(self, COLLECTION_FIELDS[kind])


COLLECTION_FIELDS: dict[RecordKind, str] = {
    RecordKind.INCOME: "incomes",
    RecordKind.EXPENSE: "expenses",
    RecordKind.CATEGORY: "categories",
    RecordKind.CREDIT_CARD: "credit_cards",
    RecordKind.CARD_TRANSACTION: "card_transactions",
    RecordKind.FINANCIAL_GOAL: "financial_goals",
    RecordKind.GOAL_CONTRIBUTION: "goal_contributions",
}

RECORD_TYPES: dict[RecordKind, type[Record]] = {
    RecordKind.INCOME: Income,
    RecordKind.EXPENSE: Expense,
    RecordKind.CATEGORY: Category,
    RecordKind.CREDIT_CARD: CreditCard,
    RecordKind.CARD_TRANSACTION: CardTransaction,
    RecordKind.FINANCIAL_GOAL: FinancialGoal,
    RecordKind.GOAL_CONTRIBUTION: GoalContribution,
}
