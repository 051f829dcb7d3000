"""Net balances and a greedy settlement plan for shared expenses."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import lru_cache

from tripboard.domain.constants import SETTLEMENT_EPSILON
from tripboard.domain.models import Expense, Ledger, Settlement


def compute_balances(participants: Sequence[str], expenses: Sequence[Expense]) -> dict[str, float]:
    """Signed net position per roster participant (positive = is owed money).

    Sharers who left the roster drop out of the split. An expense whose payer
    left, or which has no sharer left, is skipped so the totals stay balanced.
    """
    balances = {name: 0.0 for name in participants}
    for expense in expenses:
        sharers = [name for name in expense.involved if name in balances]
        if not sharers or expense.payer not in balances:
            continue
        share = expense.amount / len(sharers)
        balances[expense.payer] += expense.amount
        for name in sharers:
            balances[name] -= share
    return balances


def settle_balances(balances: Mapping[str, float]) -> list[Settlement]:
    debtors = [[name, amount] for name, amount in balances.items() if amount < -SETTLEMENT_EPSILON]
    creditors = [[name, amount] for name, amount in balances.items() if amount > SETTLEMENT_EPSILON]
    debtors.sort(key=lambda row: row[1])
    creditors.sort(key=lambda row: row[1], reverse=True)

    plan: list[Settlement] = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        amount = min(abs(debtor[1]), creditor[1])
        plan.append(Settlement(from_participant=debtor[0], to=creditor[0], amount=amount))
        debtor[1] += amount
        creditor[1] -= amount
        if abs(debtor[1]) < SETTLEMENT_EPSILON:
            i += 1
        if creditor[1] < SETTLEMENT_EPSILON:
            j += 1
    return plan


@lru_cache(maxsize=256)
def _cached_plan(participants: tuple[str, ...], expenses: tuple[Expense, ...]) -> tuple[Settlement, ...]:
    return tuple(settle_balances(compute_balances(participants, expenses)))


def compute_settlements(participants: Sequence[str], expenses: Sequence[Expense]) -> list[Settlement]:
    return list(_cached_plan(tuple(participants), tuple(expenses)))


def ledger_settlements(ledger: Ledger) -> list[Settlement]:
    return compute_settlements(ledger.participants, ledger.expenses)


def paid_totals(participants: Sequence[str], expenses: Sequence[Expense]) -> dict[str, float]:
    """Amount each roster participant has fronted."""
    totals = {name: 0.0 for name in participants}
    for expense in expenses:
        if expense.payer in totals:
            totals[expense.payer] += expense.amount
    return totals


__all__ = [
    "compute_balances",
    "compute_settlements",
    "ledger_settlements",
    "paid_totals",
    "settle_balances",
]
