"""Expense ledger and participant roster operations."""

from __future__ import annotations

import math
import uuid
from collections.abc import Iterable

from tripboard.domain.constants import DEFAULT_PARTICIPANTS
from tripboard.domain.exceptions import BlockedDeletionError, ConfirmationRequired, InvalidExpenseError
from tripboard.domain.models import Expense, Ledger


def new_ledger(participants: Iterable[str] = DEFAULT_PARTICIPANTS) -> Ledger:
    roster = Ledger()
    for name in participants:
        roster = add_participant(roster, name)
    return roster


def _dedupe(names: Iterable[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    rows: list[str] = []
    for name in names:
        text = str(name).strip()
        if not text or text in seen:
            continue
        seen.add(text)
        rows.append(text)
    return tuple(rows)


def add_expense(
    ledger: Ledger,
    *,
    description: str,
    amount: float,
    payer: str,
    involved: Iterable[str],
) -> Ledger:
    text = str(description or "").strip()
    if not text:
        raise InvalidExpenseError("description is empty")
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise InvalidExpenseError("amount is not a number") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidExpenseError("amount must be positive")
    if payer not in ledger.participants:
        raise InvalidExpenseError(f"unknown payer {payer!r}")
    shared = _dedupe(involved)
    if not shared:
        raise InvalidExpenseError("nobody is involved")
    unknown = [name for name in shared if name not in ledger.participants]
    if unknown:
        raise InvalidExpenseError(f"unknown participants: {', '.join(unknown)}")

    expense = Expense(
        id=f"exp-{uuid.uuid4().hex[:12]}",
        description=text,
        amount=value,
        payer=payer,
        involved=shared,
    )
    return ledger.model_copy(update={"expenses": ledger.expenses + (expense,)})


def remove_expense(ledger: Ledger, expense_id: str) -> Ledger:
    remaining = tuple(exp for exp in ledger.expenses if exp.id != expense_id)
    if len(remaining) == len(ledger.expenses):
        return ledger
    return ledger.model_copy(update={"expenses": remaining})


def add_participant(ledger: Ledger, name: str) -> Ledger:
    text = str(name or "").strip()
    if not text or text in ledger.participants:
        return ledger
    return ledger.model_copy(update={"participants": ledger.participants + (text,)})


def paid_by(ledger: Ledger, name: str) -> list[Expense]:
    return [exp for exp in ledger.expenses if exp.payer == name]


def involving(ledger: Ledger, name: str) -> list[Expense]:
    return [exp for exp in ledger.expenses if name in exp.involved]


def remove_participant(ledger: Ledger, name: str, *, confirmed: bool = False) -> Ledger:
    """Drop ``name`` from the roster.

    Payers of record block the removal. Participants who only share expenses
    need ``confirmed=True``; they are then stripped from every involved set
    and the remaining sharers absorb their portion.
    """
    if name not in ledger.participants:
        return ledger
    paid = paid_by(ledger, name)
    if paid:
        raise BlockedDeletionError(name, len(paid))
    shared = involving(ledger, name)
    if shared and not confirmed:
        raise ConfirmationRequired(name, len(shared))

    expenses = tuple(
        exp.model_copy(update={"involved": tuple(p for p in exp.involved if p != name)})
        if name in exp.involved
        else exp
        for exp in ledger.expenses
    )
    participants = tuple(p for p in ledger.participants if p != name)
    return ledger.model_copy(update={"participants": participants, "expenses": expenses})


__all__ = [
    "add_expense",
    "add_participant",
    "involving",
    "new_ledger",
    "paid_by",
    "remove_expense",
    "remove_participant",
]
