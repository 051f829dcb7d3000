"""Read-side views derived from a session on every read."""

from __future__ import annotations

from typing import Any, Optional

from tripboard.application.session import TripSession
from tripboard.domain.itinerary.store import find_day
from tripboard.domain.itinerary.timeline import day_timeline
from tripboard.domain.ledger.settlement import compute_balances, ledger_settlements, paid_totals
from tripboard.domain.models import Day, Place, Settlement, TimelineEntry


def active_day(session: TripSession) -> Day:
    return find_day(session.itinerary, session.active_day_id) or session.itinerary.days[0]


def active_timeline(session: TripSession) -> list[TimelineEntry]:
    return day_timeline(active_day(session))


def last_added_place(session: TripSession) -> Optional[Place]:
    """Most recent pool entry, else the active day's last stop."""
    if session.itinerary.pool:
        return session.itinerary.pool[-1]
    places = active_day(session).places
    return places[-1] if places else None


def session_balances(session: TripSession) -> dict[str, float]:
    return compute_balances(session.ledger.participants, session.ledger.expenses)


def session_settlements(session: TripSession) -> list[Settlement]:
    return ledger_settlements(session.ledger)


def session_paid_totals(session: TripSession) -> dict[str, float]:
    return paid_totals(session.ledger.participants, session.ledger.expenses)


def build_snapshot_view(session: TripSession) -> dict[str, Any]:
    nearby = last_added_place(session)
    return {
        "session_id": session.session_id,
        "itinerary": session.itinerary.model_dump(mode="json"),
        "active_day_id": active_day(session).id,
        "timeline": [entry.model_dump(mode="json") for entry in active_timeline(session)],
        "ledger": session.ledger.model_dump(mode="json"),
        "balances": {name: round(value, 2) for name, value in session_balances(session).items()},
        "settlements": [s.model_dump(mode="json", by_alias=True) for s in session_settlements(session)],
        "paid_totals": session_paid_totals(session),
        "search_results": [c.model_dump(mode="json") for c in session.search_results],
        "nearby_context": nearby.name if nearby is not None else None,
        "can_undo": bool(session.past),
        "can_redo": bool(session.future),
    }


__all__ = [
    "active_day",
    "active_timeline",
    "build_snapshot_view",
    "last_added_place",
    "session_balances",
    "session_paid_totals",
    "session_settlements",
]
