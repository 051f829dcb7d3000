"""Trip session: the immutable state container every intent transforms."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from tripboard.domain.itinerary.store import new_itinerary
from tripboard.domain.ledger.ledger import new_ledger
from tripboard.domain.models import ItineraryState, Ledger, PlaceCandidate


class PlanSnapshot(BaseModel):
    """The part of a session that undo/redo restores."""

    model_config = ConfigDict(frozen=True)

    itinerary: ItineraryState
    ledger: Ledger
    active_day_id: str


class TripSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: str
    itinerary: ItineraryState
    ledger: Ledger
    active_day_id: str
    search_results: tuple[PlaceCandidate, ...] = ()
    past: tuple[PlanSnapshot, ...] = ()
    future: tuple[PlanSnapshot, ...] = ()

    def to_store(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_store(cls, payload: dict[str, Any]) -> "TripSession":
        return cls.model_validate(payload)


def new_session_id() -> str:
    return uuid.uuid4().hex[:12]


def new_session(
    session_id: Optional[str] = None,
    participants: Optional[Iterable[str]] = None,
) -> TripSession:
    itinerary = new_itinerary()
    ledger = new_ledger() if participants is None else new_ledger(participants)
    return TripSession(
        session_id=session_id or new_session_id(),
        itinerary=itinerary,
        ledger=ledger,
        active_day_id=itinerary.days[0].id,
    )


def snapshot_of(session: TripSession) -> PlanSnapshot:
    return PlanSnapshot(
        itinerary=session.itinerary,
        ledger=session.ledger,
        active_day_id=session.active_day_id,
    )


def record_history(previous: TripSession, current: TripSession, limit: int) -> TripSession:
    """Push ``previous`` onto the undo stack of ``current`` and drop the redo stack."""
    past = previous.past + (snapshot_of(previous),)
    if limit <= 0:
        past = ()
    elif len(past) > limit:
        past = past[-limit:]
    return current.model_copy(update={"past": past, "future": ()})


def undo(session: TripSession) -> TripSession:
    if not session.past:
        return session
    target = session.past[-1]
    return session.model_copy(
        update={
            "itinerary": target.itinerary,
            "ledger": target.ledger,
            "active_day_id": target.active_day_id,
            "past": session.past[:-1],
            "future": session.future + (snapshot_of(session),),
        }
    )


def redo(session: TripSession) -> TripSession:
    if not session.future:
        return session
    target = session.future[-1]
    return session.model_copy(
        update={
            "itinerary": target.itinerary,
            "ledger": target.ledger,
            "active_day_id": target.active_day_id,
            "past": session.past + (snapshot_of(session),),
            "future": session.future[:-1],
        }
    )


__all__ = [
    "PlanSnapshot",
    "TripSession",
    "new_session",
    "new_session_id",
    "record_history",
    "redo",
    "snapshot_of",
    "undo",
]
