"""Credit and debit card calculations."""

import calendar
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from finhealth.core.models import CardsOverview, CardTransaction, CreditCard


def card_utilization(card: CreditCard) -> Decimal:
    """Balance as a percentage of the limit, 0 for a zero limit."""
    if card.limit == 0:
        return Decimal(0)
    return card.current_balance / card.limit * 100


def days_until_day_of_month(day: int, today: date | None = None) -> int:
    """Days until the next occurrence of a day of the month.

    If the day is today or already passed, it wraps into next month using
    the length of the current month.
    """
    today = today or date.today()
    days = day - today.day
    if days <= 0:
        days += calendar.monthrange(today.year, today.month)[1]
    return days


def days_until_cut_off(card: CreditCard, today: date | None = None) -> int:
    return days_until_day_of_month(card.cut_off_date, today)


def days_until_due(card: CreditCard, today: date | None = None) -> int:
    return days_until_day_of_month(card.due_date, today)


def calculate_cards_overview(
    cards: Iterable[CreditCard],
    transactions: Iterable[CardTransaction] = (),
) -> CardsOverview:
    """Aggregate limits, balances and transaction totals across cards.

    Transactions whose card_id matches no card are left out.

    Args:
        cards: All cards.
        transactions: All card transactions.

    Returns:
        CardsOverview with totals and per-card transaction sums.
    """
    cards = list(cards)
    total_limit = sum((c.limit for c in cards), Decimal(0))
    total_balance = sum((c.current_balance for c in cards), Decimal(0))

    by_card: dict[str, Decimal] = {c.id: Decimal(0) for c in cards}
    for tx in transactions:
        if tx.card_id in by_card:
            by_card[tx.card_id] += tx.amount

    return CardsOverview(
        total_limit=total_limit,
        total_balance=total_balance,
        total_available=max(total_limit - total_balance, Decimal(0)),
        overall_utilization=(
            total_balance / total_limit * 100 if total_limit > 0 else Decimal(0)
        ),
        transactions_by_card=by_card,
    )
