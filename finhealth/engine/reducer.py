"""Pure state transition function.

apply_command(state, command) returns the next state. Any change to
incomes or expenses recomputes the summary and then the health inside
the same transition, so a state never pairs a summary and a health
computed from different data. Contribution changes recompute the goals
they touch, as does updating a goal that already has contributions.
"""

from functools import singledispatch

from finhealth.core.commands import (
    AddRecord,
    Command,
    DeleteRecord,
    RecalculateGoalProgress,
    UpdateRecord,
)
from finhealth.core.models import COLLECTION_FIELDS, FinancialState, RecordKind
from finhealth.engine.calculator import calculate_health, calculate_summary
from finhealth.engine.goals import calculate_goal_progress

# Deleting a parent removes children whose attribute references its id.
CASCADES: dict[RecordKind, tuple[RecordKind, str]] = {
    RecordKind.CREDIT_CARD: (RecordKind.CARD_TRANSACTION, "card_id"),
    RecordKind.FINANCIAL_GOAL: (RecordKind.GOAL_CONTRIBUTION, "goal_id"),
}

SUMMARY_SOURCES = frozenset({RecordKind.INCOME, RecordKind.EXPENSE})


def recompute_derived(state: FinancialState) -> FinancialState:
    """Recompute summary from incomes/expenses, then health from summary."""
    summary = calculate_summary(state.incomes, state.expenses)
    health = calculate_health(summary)
    return state.model_copy(update={"summary": summary, "health": health})


def recalculate_goal(state: FinancialState, goal_id: str) -> FinancialState:
    """Recompute one goal from its contributions. Unknown ids are a no-op."""
    goals = state.financial_goals
    for index, goal in enumerate(goals):
        if goal.id == goal_id:
            updated = calculate_goal_progress(goal, state.goal_contributions)
            new_goals = goals[:index] + (updated,) + goals[index + 1 :]
            return state.model_copy(update={"financial_goals": new_goals})
    return state


def _has_contributions(state: FinancialState, goal_id: str) -> bool:
    return any(c.goal_id == goal_id for c in state.goal_contributions)


def _after_change(state: FinancialState, kind: RecordKind, goal_ids: set[str]) -> FinancialState:
    if kind in SUMMARY_SOURCES:
        state = recompute_derived(state)
    for goal_id in sorted(goal_ids):
        state = recalculate_goal(state, goal_id)
    return state


@singledispatch
def _transition(command: Command, state: FinancialState) -> FinancialState:
    raise TypeError(f"Unsupported command: {type(command).__name__}")


@_transition.register
def _(command: AddRecord, state: FinancialState) -> FinancialState:
    field = COLLECTION_FIELDS[command.kind]
    state = state.model_copy(update={field: state.collection(command.kind) + (command.record,)})
    goal_ids = {command.record.goal_id} if command.kind == RecordKind.GOAL_CONTRIBUTION else set()
    return _after_change(state, command.kind, goal_ids)


@_transition.register
def _(command: UpdateRecord, state: FinancialState) -> FinancialState:
    records = state.collection(command.kind)
    previous = next((r for r in records if r.id == command.record.id), None)
    if previous is None:
        return state

    field = COLLECTION_FIELDS[command.kind]
    replaced = tuple(command.record if r.id == command.record.id else r for r in records)
    state = state.model_copy(update={field: replaced})

    goal_ids: set[str] = set()
    if command.kind == RecordKind.GOAL_CONTRIBUTION:
        goal_ids = {previous.goal_id, command.record.goal_id}
    elif command.kind == RecordKind.FINANCIAL_GOAL and _has_contributions(state, command.record.id):
        goal_ids = {command.record.id}
    return _after_change(state, command.kind, goal_ids)


@_transition.register
def _(command: DeleteRecord, state: FinancialState) -> FinancialState:
    records = state.collection(command.kind)
    removed = next((r for r in records if r.id == command.record_id), None)
    if removed is None:
        return state

    updates = {
        COLLECTION_FIELDS[command.kind]: tuple(r for r in records if r.id != command.record_id)
    }
    if command.kind in CASCADES:
        child_kind, reference = CASCADES[command.kind]
        updates[COLLECTION_FIELDS[child_kind]] = tuple(
            r for r in state.collection(child_kind) if getattr(r, reference) != command.record_id
        )
    state = state.model_copy(update=updates)

    goal_ids = {removed.goal_id} if command.kind == RecordKind.GOAL_CONTRIBUTION else set()
    return _after_change(state, command.kind, goal_ids)


@_transition.register
def _(command: RecalculateGoalProgress, state: FinancialState) -> FinancialState:
    return recalculate_goal(state, command.goal_id)


def apply_command(state: FinancialState, command: Command) -> FinancialState:
    """Apply one command and return the resulting state.

    The input state is never modified. Updating or deleting an unknown id
    returns the input state unchanged.

    Args:
        state: Current state.
        command: AddRecord, UpdateRecord, DeleteRecord or
            RecalculateGoalProgress.

    Returns:
        Next state with derived data consistent with its collections.
    """
    return _transition(command, state)
