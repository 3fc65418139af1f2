"""Commands consumed by the state transition function.

Every change to a FinancialState is expressed as one of these tagged
variants, so a session can be audited or replayed command by command.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from finhealth.core.models import (
    RECORD_TYPES,
    CardTransaction,
    Category,
    CreditCard,
    Expense,
    FinancialGoal,
    GoalContribution,
    Income,
    RecordKind,
)

AnyRecord = Union[
    Income,
    Expense,
    Category,
    CreditCard,
    CardTransaction,
    FinancialGoal,
    GoalContribution,
]


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True)


class _RecordCommand(_Command):
    """Base for commands carrying a record of the given kind."""

    kind: RecordKind
    record: AnyRecord

    @model_validator(mode="after")
    def check_record_matches_kind(self) -> "_RecordCommand":
        expected = RECORD_TYPES[self.kind]
        if not isinstance(self.record, expected):
            raise ValueError(
                f"expected {expected.__name__} record for kind '{self.kind.value}', "
                f"got {type(self.record).__name__}"
            )
        return self


class AddRecord(_RecordCommand):
    """Append a record that already carries its generated id."""

    op: Literal["add"] = "add"


class UpdateRecord(_RecordCommand):
    """Replace the record sharing record.id. No-op if the id is absent."""

    op: Literal["update"] = "update"


class DeleteRecord(_Command):
    """Remove a record by id, cascading to dependents of cards and goals."""

    op: Literal["delete"] = "delete"
    kind: RecordKind
    record_id: str


class RecalculateGoalProgress(_Command):
    """Recompute current_amount, progress and status of one goal."""

    op: Literal["recalculate_goal"] = "recalculate_goal"
    goal_id: str


Command = Annotated[
    Union[AddRecord, UpdateRecord, DeleteRecord, RecalculateGoalProgress],
    Field(discriminator="op"),
]
