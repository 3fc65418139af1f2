"""Financial state container.

A FinancialStore owns the current FinancialState of one session. It is
created explicitly and injected into whatever needs it; every mutation
goes through dispatch(), which applies the pure transition function and
optionally persists the new snapshot.
"""

import logging
import threading
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from finhealth.core.commands import (
    AddRecord,
    Command,
    DeleteRecord,
    RecalculateGoalProgress,
    UpdateRecord,
)
from finhealth.core.exceptions import SessionClosedError
from finhealth.core.ids import IdGenerator
from finhealth.core.models import (
    RECORD_TYPES,
    CardTransaction,
    Category,
    CreditCard,
    Expense,
    FinancialGoal,
    FinancialHealth,
    FinancialState,
    FinancialSummary,
    GoalContribution,
    Income,
    Record,
    RecordKind,
)
from finhealth.engine.reducer import apply_command, recompute_derived
from finhealth.storage.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


class FinancialStore:
    """State container for one financial session.

    Mutations are serialized behind a single lock, and the derived
    summary/health are recomputed within the same transition as the
    change that triggered them.

    Usage:
        with FinancialStore.open("default", JsonFileSnapshotStore(path)) as store:
            store.add_income(name="Salary", amount=Decimal(3000), ...)
            print(store.health.score)
    """

    def __init__(
        self,
        state: FinancialState | None = None,
        *,
        snapshots: SnapshotStore | None = None,
        session: str = "default",
        autosave: bool = True,
        id_generator: Callable[[], str] | None = None,
    ):
        """Initialize a store.

        Args:
            state: Initial state. Derived data in it is recomputed.
                Defaults to FinancialState.initial().
            snapshots: Persistence collaborator. None keeps the session
                in memory only.
            session: Key under which snapshots are stored.
            autosave: Save a snapshot after every mutation.
            id_generator: Callable issuing unique record ids.
        """
        self._state = recompute_derived(state) if state is not None else FinancialState.initial()
        self._snapshots = snapshots
        self.session = session
        self.autosave = autosave
        self._new_id = id_generator or IdGenerator()
        self._lock = threading.RLock()
        self._closed = False
        self._dirty = False

    @classmethod
    def open(
        cls,
        session: str,
        snapshots: SnapshotStore,
        *,
        autosave: bool = True,
        id_generator: Callable[[], str] | None = None,
    ) -> "FinancialStore":
        """Open a session, loading its snapshot if one exists."""
        state = snapshots.load(session)
        if state is None:
            logger.info("Starting new session '%s'", session)
        else:
            logger.info("Loaded session '%s'", session)
        return cls(
            state,
            snapshots=snapshots,
            session=session,
            autosave=autosave,
            id_generator=id_generator,
        )

    def close(self) -> None:
        """Persist unsaved changes and refuse further mutations."""
        with self._lock:
            if self._closed:
                return
            if self._dirty:
                self.save()
            self._closed = True
            logger.info("Closed session '%s'", self.session)

    def __enter__(self) -> "FinancialStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def save(self) -> None:
        """Write the current state to the snapshot store, if any."""
        if self._snapshots is None:
            return
        with self._lock:
            self._snapshots.save(self.session, self._state)
            self._dirty = False

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def dispatch(self, command: Command) -> FinancialState:
        """Apply a command and return the new state.

        Raises:
            SessionClosedError: If the store has been closed.
        """
        with self._lock:
            if self._closed:
                raise SessionClosedError(f"Session '{self.session}' is closed")
            logger.debug("Dispatching %r", command)
            new_state = apply_command(self._state, command)
            if new_state is self._state:
                return new_state
            self._state = new_state
            self._dirty = True
            if self.autosave:
                self.save()
            return new_state

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def state(self) -> FinancialState:
        return self._state

    @property
    def incomes(self) -> tuple[Income, ...]:
        return self._state.incomes

    @property
    def expenses(self) -> tuple[Expense, ...]:
        return self._state.expenses

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._state.categories

    @property
    def credit_cards(self) -> tuple[CreditCard, ...]:
        return self._state.credit_cards

    @property
    def card_transactions(self) -> tuple[CardTransaction, ...]:
        return self._state.card_transactions

    @property
    def financial_goals(self) -> tuple[FinancialGoal, ...]:
        return self._state.financial_goals

    @property
    def goal_contributions(self) -> tuple[GoalContribution, ...]:
        return self._state.goal_contributions

    @property
    def summary(self) -> FinancialSummary:
        return self._state.summary

    @property
    def health(self) -> FinancialHealth:
        return self._state.health

    def get(self, kind: RecordKind, record_id: str) -> Record | None:
        """Find a record by id, or None."""
        return next((r for r in self._state.collection(kind) if r.id == record_id), None)

    # -------------------------------------------------------------------------
    # Generic CRUD
    # -------------------------------------------------------------------------

    def create(self, kind: RecordKind, fields: Mapping[str, Any]) -> Record:
        """Create a record with a fresh id and append it.

        Args:
            kind: Collection to add to.
            fields: Record fields without id.

        Returns:
            The stored record.
        """
        fields = dict(fields)
        fields.pop("id", None)
        if kind == RecordKind.FINANCIAL_GOAL:
            fields["progress"] = Decimal(0)
        with self._lock:
            record = RECORD_TYPES[kind](id=self._new_id(), **fields)
            self.dispatch(AddRecord(kind=kind, record=record))
        return record

    def update(self, kind: RecordKind, record: Record) -> FinancialState:
        """Replace the record with the same id. Unknown ids are a no-op."""
        return self.dispatch(UpdateRecord(kind=kind, record=record))

    def delete(self, kind: RecordKind, record_id: str) -> FinancialState:
        """Delete a record by id, cascading for cards and goals."""
        return self.dispatch(DeleteRecord(kind=kind, record_id=record_id))

    def calculate_goal_progress(self, goal_id: str) -> FinancialState:
        """Recompute one goal's amount, progress and status on demand."""
        return self.dispatch(RecalculateGoalProgress(goal_id=goal_id))

    # -------------------------------------------------------------------------
    # Per-kind CRUD
    # -------------------------------------------------------------------------

    def add_income(self, **fields: Any) -> Income:
        return self.create(RecordKind.INCOME, fields)

    def update_income(self, income: Income) -> FinancialState:
        return self.update(RecordKind.INCOME, income)

    def delete_income(self, income_id: str) -> FinancialState:
        return self.delete(RecordKind.INCOME, income_id)

    def add_expense(self, **fields: Any) -> Expense:
        return self.create(RecordKind.EXPENSE, fields)

    def update_expense(self, expense: Expense) -> FinancialState:
        return self.update(RecordKind.EXPENSE, expense)

    def delete_expense(self, expense_id: str) -> FinancialState:
        return self.delete(RecordKind.EXPENSE, expense_id)

    def add_category(self, **fields: Any) -> Category:
        return self.create(RecordKind.CATEGORY, fields)

    def add_credit_card(self, **fields: Any) -> CreditCard:
        return self.create(RecordKind.CREDIT_CARD, fields)

    def update_credit_card(self, card: CreditCard) -> FinancialState:
        return self.update(RecordKind.CREDIT_CARD, card)

    def delete_credit_card(self, card_id: str) -> FinancialState:
        return self.delete(RecordKind.CREDIT_CARD, card_id)

    def add_card_transaction(self, **fields: Any) -> CardTransaction:
        return self.create(RecordKind.CARD_TRANSACTION, fields)

    def update_card_transaction(self, transaction: CardTransaction) -> FinancialState:
        return self.update(RecordKind.CARD_TRANSACTION, transaction)

    def delete_card_transaction(self, transaction_id: str) -> FinancialState:
        return self.delete(RecordKind.CARD_TRANSACTION, transaction_id)

    def add_financial_goal(self, **fields: Any) -> FinancialGoal:
        return self.create(RecordKind.FINANCIAL_GOAL, fields)

    def update_financial_goal(self, goal: FinancialGoal) -> FinancialState:
        return self.update(RecordKind.FINANCIAL_GOAL, goal)

    def delete_financial_goal(self, goal_id: str) -> FinancialState:
        return self.delete(RecordKind.FINANCIAL_GOAL, goal_id)

    def add_goal_contribution(self, **fields: Any) -> GoalContribution:
        return self.create(RecordKind.GOAL_CONTRIBUTION, fields)

    def update_goal_contribution(self, contribution: GoalContribution) -> FinancialState:
        return self.update(RecordKind.GOAL_CONTRIBUTION, contribution)

    def delete_goal_contribution(self, contribution_id: str) -> FinancialState:
        return self.delete(RecordKind.GOAL_CONTRIBUTION, contribution_id)
