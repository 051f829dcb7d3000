"""Apply one intent to a session and report what happened.

``apply_intent`` is the only entry point that changes a session. It never
mutates its input: the caller receives a new session plus an ``Outcome``
describing whether the intent was applied, ignored, rejected, or needs an
explicit confirmation before it can proceed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict

from tripboard.application import intents as it
from tripboard.application.session import TripSession, record_history, redo, undo
from tripboard.domain.enums import TransportMode
from tripboard.domain.exceptions import ConfirmationRequired, DomainError, InvalidFieldError, OutOfRangeError
from tripboard.domain.itinerary import store
from tripboard.domain.itinerary.fields import coerce_stay_minutes, coerce_travel_minutes, is_clock
from tripboard.domain.ledger import ledger as ledger_ops
from tripboard.domain.models import SearchLocation, Slot, parse_location
from tripboard.infrastructure.logging import StructuredLogger, get_logger

DEFAULT_HISTORY_LIMIT = 50


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    IGNORED = "ignored"
    REJECTED = "rejected"
    CONFIRM = "confirm"


class Outcome(BaseModel):
    status: OutcomeStatus
    code: str = ""
    message: str = ""
    count: Optional[int] = None


class IntentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    session: TripSession
    outcome: Outcome


class _Ignored(Exception):
    def __init__(self, code: str):
        self.code = code
        super().__init__(code)


def _with_itinerary(session: TripSession, itinerary, code: str) -> TripSession:
    if itinerary is session.itinerary:
        raise _Ignored(code)
    return session.model_copy(update={"itinerary": itinerary})


def _with_ledger(session: TripSession, ledger, code: str) -> TripSession:
    if ledger is session.ledger:
        raise _Ignored(code)
    return session.model_copy(update={"ledger": ledger})


def _search_candidate(session: TripSession, index: int):
    if index < 0 or index >= len(session.search_results):
        raise OutOfRangeError("search", index, len(session.search_results))
    return session.search_results[index]


def _add_place(session: TripSession, intent: it.AddPlaceIntent) -> TripSession:
    if intent.search_index is not None:
        source = _search_candidate(session, intent.search_index)
    else:
        source = intent.place or intent.candidate
    return _with_itinerary(session, store.add_to_pool(session.itinerary, source), "duplicate")


def _move_place(session: TripSession, intent: it.MovePlaceIntent) -> TripSession:
    move = intent.to_move()
    dest = move.destination
    if dest is None or store.is_noop_move(move) or isinstance(dest.location, SearchLocation):
        raise _Ignored("invalid_move")
    if isinstance(move.source.location, SearchLocation):
        candidate = _search_candidate(session, move.source.index)
        itinerary = store.insert_place(session.itinerary, candidate, Slot(location=dest.location, index=dest.index))
    else:
        itinerary = store.move(session.itinerary, move)
    return _with_itinerary(session, itinerary, "invalid_move")


def _remove_place(session: TripSession, intent: it.RemovePlaceIntent) -> TripSession:
    location = parse_location(intent.location)
    return _with_itinerary(session, store.remove_at(session.itinerary, location, intent.index), "noop")


def _clamp_place_fields(fields: dict[str, Any]) -> dict[str, Any]:
    cleaned = dict(fields)
    if "stay_minutes" in cleaned:
        cleaned["stay_minutes"] = coerce_stay_minutes(cleaned["stay_minutes"])
    if "travel_minutes_to_next" in cleaned:
        cleaned["travel_minutes_to_next"] = coerce_travel_minutes(cleaned["travel_minutes_to_next"])
    transport = cleaned.get("transport_to_next")
    if transport is not None and not isinstance(transport, TransportMode):
        try:
            cleaned["transport_to_next"] = TransportMode(str(transport).upper())
        except ValueError:
            raise InvalidFieldError("transport_to_next", transport) from None
    return cleaned


def _update_place(session: TripSession, intent: it.UpdatePlaceIntent) -> TripSession:
    itinerary = store.update_place(
        session.itinerary,
        intent.day_id,
        intent.index,
        _clamp_place_fields(intent.fields),
    )
    return _with_itinerary(session, itinerary, "noop")


def _add_day(session: TripSession, intent: it.AddDayIntent) -> TripSession:
    itinerary = store.add_day(session.itinerary)
    return session.model_copy(update={"itinerary": itinerary, "active_day_id": itinerary.days[-1].id})


def _remove_day(session: TripSession, intent: it.RemoveDayIntent) -> TripSession:
    updated = _with_itinerary(session, store.remove_day(session.itinerary, intent.day_id), "last_day")
    if store.find_day(updated.itinerary, session.active_day_id) is None:
        updated = updated.model_copy(update={"active_day_id": updated.itinerary.days[0].id})
    return updated


def _move_day(session: TripSession, intent: it.MoveDayIntent) -> TripSession:
    return _with_itinerary(session, store.move_day(session.itinerary, intent.day_id, intent.index), "noop")


def _update_day(session: TripSession, intent: it.UpdateDayIntent) -> TripSession:
    fields: dict[str, Any] = {}
    if intent.start_time is not None:
        if not is_clock(intent.start_time):
            raise InvalidFieldError("start_time", intent.start_time)
        hh, mm = intent.start_time.strip().split(":")
        fields["start_time"] = f"{int(hh):02d}:{mm}"
    if intent.title is not None:
        fields["title"] = intent.title
    return _with_itinerary(session, store.update_day(session.itinerary, intent.day_id, fields), "noop")


def _select_day(session: TripSession, intent: it.SelectDayIntent) -> TripSession:
    if store.find_day(session.itinerary, intent.day_id) is None:
        raise _Ignored("unknown_day")
    if intent.day_id == session.active_day_id:
        raise _Ignored("noop")
    return session.model_copy(update={"active_day_id": intent.day_id})


def _add_expense(session: TripSession, intent: it.AddExpenseIntent) -> TripSession:
    ledger = ledger_ops.add_expense(
        session.ledger,
        description=intent.description,
        amount=intent.amount,
        payer=intent.payer,
        involved=intent.involved,
    )
    return _with_ledger(session, ledger, "noop")


def _remove_expense(session: TripSession, intent: it.RemoveExpenseIntent) -> TripSession:
    return _with_ledger(session, ledger_ops.remove_expense(session.ledger, intent.expense_id), "unknown_expense")


def _add_participant(session: TripSession, intent: it.AddParticipantIntent) -> TripSession:
    return _with_ledger(session, ledger_ops.add_participant(session.ledger, intent.name), "duplicate_participant")


def _remove_participant(session: TripSession, intent: it.RemoveParticipantIntent) -> TripSession:
    ledger = ledger_ops.remove_participant(session.ledger, intent.name, confirmed=intent.confirmed)
    return _with_ledger(session, ledger, "unknown_participant")


def _set_search_results(session: TripSession, intent: it.SetSearchResultsIntent) -> TripSession:
    return session.model_copy(update={"search_results": tuple(intent.candidates)})


def _undo(session: TripSession, intent: it.UndoIntent) -> TripSession:
    updated = undo(session)
    if updated is session:
        raise _Ignored("nothing_to_undo")
    return updated


def _redo(session: TripSession, intent: it.RedoIntent) -> TripSession:
    updated = redo(session)
    if updated is session:
        raise _Ignored("nothing_to_redo")
    return updated


_HANDLERS: dict[type, Callable[[TripSession, Any], TripSession]] = {
    it.AddPlaceIntent: _add_place,
    it.MovePlaceIntent: _move_place,
    it.RemovePlaceIntent: _remove_place,
    it.UpdatePlaceIntent: _update_place,
    it.AddDayIntent: _add_day,
    it.RemoveDayIntent: _remove_day,
    it.MoveDayIntent: _move_day,
    it.UpdateDayIntent: _update_day,
    it.SelectDayIntent: _select_day,
    it.AddExpenseIntent: _add_expense,
    it.RemoveExpenseIntent: _remove_expense,
    it.AddParticipantIntent: _add_participant,
    it.RemoveParticipantIntent: _remove_participant,
    it.SetSearchResultsIntent: _set_search_results,
    it.UndoIntent: _undo,
    it.RedoIntent: _redo,
}
_HISTORY_EXEMPT = (it.UndoIntent, it.RedoIntent)


def apply_intent(
    session: TripSession,
    intent: it.Intent,
    *,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
    logger: StructuredLogger | None = None,
) -> IntentResult:
    log = logger or get_logger()
    handler = _HANDLERS[type(intent)]
    try:
        updated = handler(session, intent)
    except _Ignored as ignored:
        log.intent(intent.type, OutcomeStatus.IGNORED.value, code=ignored.code, session_id=session.session_id)
        return IntentResult(session=session, outcome=Outcome(status=OutcomeStatus.IGNORED, code=ignored.code))
    except ConfirmationRequired as exc:
        log.intent(intent.type, OutcomeStatus.CONFIRM.value, code=exc.code, session_id=session.session_id)
        return IntentResult(
            session=session,
            outcome=Outcome(status=OutcomeStatus.CONFIRM, code=exc.code, message=str(exc), count=exc.count),
        )
    except DomainError as exc:
        log.intent(intent.type, OutcomeStatus.REJECTED.value, code=exc.code, session_id=session.session_id)
        return IntentResult(
            session=session,
            outcome=Outcome(
                status=OutcomeStatus.REJECTED,
                code=exc.code,
                message=str(exc),
                count=getattr(exc, "count", None),
            ),
        )

    plan_changed = updated.itinerary is not session.itinerary or updated.ledger is not session.ledger
    if plan_changed and not isinstance(intent, _HISTORY_EXEMPT):
        updated = record_history(session, updated, history_limit)
    log.intent(intent.type, OutcomeStatus.APPLIED.value, session_id=session.session_id)
    return IntentResult(session=updated, outcome=Outcome(status=OutcomeStatus.APPLIED))


def apply_intents(session: TripSession, intents: list[it.Intent], **kwargs: Any) -> TripSession:
    """Fold a sequence of intents, keeping only the final session."""
    for intent in intents:
        session = apply_intent(session, intent, **kwargs).session
    return session


__all__ = [
    "IntentResult",
    "Outcome",
    "OutcomeStatus",
    "apply_intent",
    "apply_intents",
]
