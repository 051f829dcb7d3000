"""apply_intent: outcomes for every intent family."""

import io
import json

import pytest
from pydantic import ValidationError

from tripboard.application import intents as it
from tripboard.application.reducer import OutcomeStatus, apply_intent, apply_intents
from tripboard.application.session import TripSession, new_session
from tripboard.domain.enums import TransportMode
from tripboard.domain.models import PlaceCandidate
from tripboard.infrastructure.logging import StructuredLogger

CANDIDATES = [
    PlaceCandidate(name="Taipei 101", description="tower", lat=25.0340, lng=121.5645),
    PlaceCandidate(name="Longshan Temple", description="temple", lat=25.0372, lng=121.4999),
    PlaceCandidate(name="Beitou", description="hot springs", lat=25.1367, lng=121.5066),
]


@pytest.fixture
def session():
    return apply_intents(new_session("s1"), [it.SetSearchResultsIntent(candidates=CANDIDATES)])


def _day(session):
    return session.itinerary.days[0].id


def test_set_search_results_does_not_touch_history(session):
    assert len(session.search_results) == 3
    assert session.past == ()


def test_add_place_from_search_goes_to_pool(session):
    result = apply_intent(session, it.AddPlaceIntent(search_index=1))
    assert result.outcome.status is OutcomeStatus.APPLIED
    assert [p.name for p in result.session.itinerary.pool] == ["Longshan Temple"]
    assert result.session.past


def test_add_place_bad_search_index_is_rejected(session):
    result = apply_intent(session, it.AddPlaceIntent(search_index=7))
    assert result.outcome.status is OutcomeStatus.REJECTED
    assert result.outcome.code == "out_of_range"
    assert result.session is session


def test_add_existing_place_is_ignored(session):
    session = apply_intent(session, it.AddPlaceIntent(search_index=0)).session
    place = session.itinerary.pool[0]
    result = apply_intent(session, it.AddPlaceIntent(place=place))
    assert result.outcome.status is OutcomeStatus.IGNORED
    assert result.outcome.code == "duplicate"


def test_drag_from_search_into_day(session):
    intent = it.MovePlaceIntent(source_location="search", source_index=2, dest_location=_day(session), dest_index=0)
    result = apply_intent(session, intent)
    assert result.outcome.status is OutcomeStatus.APPLIED
    place = result.session.itinerary.days[0].places[0]
    assert place.name == "Beitou"
    assert place.stay_minutes == 60
    assert len(result.session.search_results) == 3


def test_drop_into_search_or_nowhere_is_ignored(session):
    session = apply_intent(session, it.AddPlaceIntent(search_index=0)).session
    for intent in (
        it.MovePlaceIntent(source_location="pool", source_index=0, dest_location="search", dest_index=0),
        it.MovePlaceIntent(source_location="pool", source_index=0),
        it.MovePlaceIntent(source_location="pool", source_index=0, dest_location="pool", dest_index=0),
    ):
        result = apply_intent(session, intent)
        assert result.outcome.status is OutcomeStatus.IGNORED
        assert result.outcome.code == "invalid_move"
        assert result.session is session


def test_move_to_unknown_day_is_rejected(session):
    session = apply_intent(session, it.AddPlaceIntent(search_index=0)).session
    intent = it.MovePlaceIntent(source_location="pool", source_index=0, dest_location="ghost", dest_index=0)
    result = apply_intent(session, intent)
    assert result.outcome.status is OutcomeStatus.REJECTED
    assert result.outcome.code == "unknown_location"


def test_remove_place(session):
    session = apply_intent(session, it.AddPlaceIntent(search_index=0)).session
    result = apply_intent(session, it.RemovePlaceIntent(location="pool", index=0))
    assert result.session.itinerary.pool == ()
    bad = apply_intent(session, it.RemovePlaceIntent(location="pool", index=4))
    assert bad.outcome.code == "out_of_range"


def test_update_place_clamps_and_normalizes(session):
    day = _day(session)
    session = apply_intent(
        session, it.MovePlaceIntent(source_location="search", source_index=0, dest_location=day, dest_index=0)
    ).session
    fields = {"stay_minutes": "-5", "travel_minutes_to_next": "abc", "transport_to_next": "walk"}
    place = apply_intent(session, it.UpdatePlaceIntent(day_id=day, index=0, fields=fields)).session.itinerary.days[0].places[0]
    assert place.stay_minutes == 1
    assert place.travel_minutes_to_next == 15
    assert place.transport_to_next is TransportMode.WALK

    bad = apply_intent(session, it.UpdatePlaceIntent(day_id=day, index=0, fields={"transport_to_next": "boat"}))
    assert bad.outcome.status is OutcomeStatus.REJECTED
    assert bad.outcome.code == "invalid_field"


def test_day_lifecycle_tracks_active_day(session):
    result = apply_intent(session, it.AddDayIntent())
    second = result.session.itinerary.days[1].id
    assert result.session.active_day_id == second

    result = apply_intent(result.session, it.RemoveDayIntent(day_id=second))
    assert result.session.active_day_id == result.session.itinerary.days[0].id
    assert [d.title for d in result.session.itinerary.days] == ["Day 1"]

    last = apply_intent(result.session, it.RemoveDayIntent(day_id=result.session.itinerary.days[0].id))
    assert last.outcome.status is OutcomeStatus.IGNORED
    assert last.outcome.code == "last_day"


def test_select_day(session):
    first = _day(session)
    assert apply_intent(session, it.SelectDayIntent(day_id=first)).outcome.code == "noop"
    assert apply_intent(session, it.SelectDayIntent(day_id="ghost")).outcome.code == "unknown_day"
    session = apply_intent(session, it.AddDayIntent()).session
    result = apply_intent(session, it.SelectDayIntent(day_id=first))
    assert result.outcome.status is OutcomeStatus.APPLIED
    assert result.session.active_day_id == first


def test_update_day_start_time(session):
    day = _day(session)
    result = apply_intent(session, it.UpdateDayIntent(day_id=day, start_time="8:30"))
    assert result.session.itinerary.days[0].start_time == "08:30"
    bad = apply_intent(session, it.UpdateDayIntent(day_id=day, start_time="25:00"))
    assert bad.outcome.code == "invalid_field"


def test_move_day(session):
    session = apply_intents(session, [it.AddDayIntent(), it.AddDayIntent()])
    third = session.itinerary.days[2].id
    result = apply_intent(session, it.MoveDayIntent(day_id=third, index=0))
    assert result.session.itinerary.days[0].id == third
    assert result.session.itinerary.days[0].title == "Day 3"


def test_expense_flow_and_participant_removal(session):
    session = apply_intent(
        session, it.AddExpenseIntent(description="Dinner", amount="90", payer="Alice", involved=["Alice", "Carol"])
    ).session
    assert len(session.ledger.expenses) == 1

    bad = apply_intent(session, it.AddExpenseIntent(description="", amount=5, payer="Alice", involved=["Alice"]))
    assert bad.outcome.code == "invalid_expense"

    blocked = apply_intent(session, it.RemoveParticipantIntent(name="Alice"))
    assert blocked.outcome.status is OutcomeStatus.REJECTED
    assert blocked.outcome.code == "blocked_deletion"
    assert blocked.outcome.count == 1

    confirm = apply_intent(session, it.RemoveParticipantIntent(name="Carol"))
    assert confirm.outcome.status is OutcomeStatus.CONFIRM
    assert confirm.outcome.count == 1
    assert confirm.session is session

    done = apply_intent(session, it.RemoveParticipantIntent(name="Carol", confirmed=True))
    assert done.outcome.status is OutcomeStatus.APPLIED
    assert done.session.ledger.participants == ("Alice", "Bob")
    assert done.session.ledger.expenses[0].involved == ("Alice",)

    missing = apply_intent(session, it.RemoveExpenseIntent(expense_id="exp-nope"))
    assert missing.outcome.code == "unknown_expense"


def test_participants(session):
    assert apply_intent(session, it.AddParticipantIntent(name="Bob")).outcome.code == "duplicate_participant"
    assert apply_intent(session, it.RemoveParticipantIntent(name="Zed")).outcome.code == "unknown_participant"
    added = apply_intent(session, it.AddParticipantIntent(name="Dana"))
    assert added.session.ledger.participants[-1] == "Dana"


def test_parse_intent_dispatches_on_type():
    intent = it.parse_intent({"type": "move_place", "source_location": "pool", "source_index": 0})
    assert isinstance(intent, it.MovePlaceIntent)
    assert intent.to_move().destination is None
    with pytest.raises(ValidationError):
        it.parse_intent({"type": "teleport"})
    with pytest.raises(ValidationError):
        it.parse_intent({"type": "add_place"})


def test_outcomes_are_logged_as_json_lines(session):
    buf = io.StringIO()
    logger = StructuredLogger(trace_id="t1", output=buf)
    apply_intent(session, it.AddPlaceIntent(search_index=0), logger=logger)
    apply_intent(session, it.SelectDayIntent(day_id="ghost"), logger=logger)
    events = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert [e["event"] for e in events] == ["intent_applied", "intent_ignored"]
    assert events[1]["code"] == "unknown_day"
    assert all(e["trace_id"] == "t1" and e["session_id"] == "s1" for e in events)


def test_update_place_with_bad_types_leaves_session_storable(session):
    day = _day(session)
    session = apply_intent(
        session, it.MovePlaceIntent(source_location="search", source_index=0, dest_location=day, dest_index=0)
    ).session
    for fields in ({"name": None}, {"estimated_time": 3}):
        result = apply_intent(session, it.UpdatePlaceIntent(day_id=day, index=0, fields=fields))
        assert result.outcome.status is OutcomeStatus.REJECTED
        assert result.outcome.code == "invalid_field"
        assert result.session is session
    assert TripSession.from_store(session.to_store()) == session


def test_update_place_accepts_transport_enum(session):
    day = _day(session)
    session = apply_intent(
        session, it.MovePlaceIntent(source_location="search", source_index=0, dest_location=day, dest_index=0)
    ).session
    result = apply_intent(
        session, it.UpdatePlaceIntent(day_id=day, index=0, fields={"transport_to_next": TransportMode.WALK})
    )
    assert result.outcome.status is OutcomeStatus.APPLIED
    assert result.session.itinerary.days[0].places[0].transport_to_next is TransportMode.WALK
