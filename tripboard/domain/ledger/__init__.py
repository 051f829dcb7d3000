"""Shared expenses: roster, records and settlement."""

from tripboard.domain.ledger.ledger import (
    add_expense,
    add_participant,
    new_ledger,
    remove_expense,
    remove_participant,
)
from tripboard.domain.ledger.settlement import (
    compute_balances,
    compute_settlements,
    ledger_settlements,
    paid_totals,
    settle_balances,
)

__all__ = [
    "add_expense",
    "add_participant",
    "compute_balances",
    "compute_settlements",
    "ledger_settlements",
    "new_ledger",
    "paid_totals",
    "remove_expense",
    "remove_participant",
    "settle_balances",
]
