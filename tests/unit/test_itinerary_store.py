"""Itinerary store: pool/day sequences under add, move and remove."""

from __future__ import annotations

import pytest

from tripboard.domain.enums import TransportMode
from tripboard.domain.exceptions import InvalidFieldError, OutOfRangeError, UnknownLocationError
from tripboard.domain.itinerary import store
from tripboard.domain.models import (
    Coordinates,
    Day,
    DayLocation,
    ItineraryState,
    MoveIntent,
    Place,
    PlaceCandidate,
    PoolLocation,
    Slot,
)


def _place(pid: str, **fields) -> Place:
    return Place(id=pid, name=pid.upper(), coordinates=Coordinates(lat=25.0, lng=121.5), **fields)


def _state(pool=(), *days) -> ItineraryState:
    if not days:
        days = ((),)
    return ItineraryState(
        pool=tuple(pool),
        days=tuple(
            Day(id=f"d{i}", title=f"Day {i}", places=tuple(places)) for i, places in enumerate(days, start=1)
        ),
    )


def _names(places) -> list[str]:
    return [p.id for p in places]


def _move(src_loc, src_idx, dest_loc=None, dest_idx=None) -> MoveIntent:
    return MoveIntent.from_gesture(src_loc, src_idx, dest_loc, dest_idx)


def test_new_itinerary_has_one_empty_day():
    state = store.new_itinerary()
    assert state.pool == ()
    assert len(state.days) == 1
    day = state.days[0]
    assert day.title == "Day 1"
    assert day.start_time == "09:00"
    assert day.places == ()


def test_add_to_pool_assigns_fresh_ids_for_repeated_candidates():
    candidate = PlaceCandidate(name="Taipei 101", description="tower", lat=25.03, lng=121.56)
    state = store.add_to_pool(store.new_itinerary(), candidate)
    state = store.add_to_pool(state, candidate)

    assert len(state.pool) == 2
    assert state.pool[0].id != state.pool[1].id
    assert all(p.name == "Taipei 101" for p in state.pool)
    assert state.pool[0].stay_minutes is None
    assert state.pool[0].transport_to_next is None


def test_add_to_pool_ignores_place_already_present():
    state = _state([_place("a")], [_place("b")])
    assert store.add_to_pool(state, _place("a")) is state
    assert store.add_to_pool(state, _place("b")) is state


def test_add_to_pool_clones_unknown_place_with_new_id():
    state = store.add_to_pool(_state(), _place("x", stay_minutes=30))
    assert len(state.pool) == 1
    assert state.pool[0].id != "x"
    assert state.pool[0].stay_minutes == 30


def test_move_without_destination_is_noop():
    state = _state([_place("a")])
    assert store.move(state, _move("pool", 0)) is state
    assert store.move(state, _move("pool", 0, "d1", None)) is state


def test_move_to_same_slot_is_noop():
    state = _state([_place("a"), _place("b")])
    assert store.move(state, _move("pool", 1, "pool", 1)) is state


def test_move_into_day_fills_scheduling_defaults():
    state = _state([_place("a")])
    moved = store.move(state, _move("pool", 0, "d1", 0))

    assert moved.pool == ()
    place = moved.days[0].places[0]
    assert place.id == "a"
    assert place.stay_minutes == 60
    assert place.travel_minutes_to_next == 15
    assert place.transport_to_next is TransportMode.CAR


def test_move_into_day_keeps_existing_values_including_zero_travel():
    state = _state([_place("a", stay_minutes=25, travel_minutes_to_next=0, transport_to_next=TransportMode.WALK)])
    place = store.move(state, _move("pool", 0, "d1", 0)).days[0].places[0]
    assert place.stay_minutes == 25
    assert place.travel_minutes_to_next == 0
    assert place.transport_to_next is TransportMode.WALK


def test_reorder_within_pool_never_fills_defaults():
    state = _state([_place("a"), _place("b")])
    moved = store.move(state, _move("pool", 0, "pool", 1))
    assert _names(moved.pool) == ["b", "a"]
    assert all(p.stay_minutes is None for p in moved.pool)


def test_move_day_to_pool_keeps_fields():
    state = _state([], [_place("a", stay_minutes=45, travel_minutes_to_next=10)])
    moved = store.move(state, _move("d1", 0, "pool", 0))
    assert moved.days[0].places == ()
    assert moved.pool[0].stay_minutes == 45
    assert moved.pool[0].travel_minutes_to_next == 10


def test_reorder_within_day_uses_remove_then_insert():
    state = _state([], [_place("a"), _place("b"), _place("c")])
    moved = store.move(state, _move("d1", 0, "d1", 2))
    assert _names(moved.days[0].places) == ["b", "c", "a"]

    moved = store.move(state, _move("d1", 2, "d1", 0))
    assert _names(moved.days[0].places) == ["c", "a", "b"]


def test_move_between_days():
    state = _state([], [_place("a"), _place("b")], [_place("c")])
    moved = store.move(state, _move("d1", 1, "d2", 0))
    assert _names(moved.days[0].places) == ["a"]
    assert _names(moved.days[1].places) == ["b", "c"]


def test_destination_index_is_clamped():
    state = _state([_place("a"), _place("b")], [_place("c")])
    moved = store.move(state, _move("pool", 0, "d1", 99))
    assert _names(moved.days[0].places) == ["c", "a"]

    moved = store.move(state, _move("pool", 1, "d1", -4))
    assert _names(moved.days[0].places) == ["b", "c"]


def test_move_rejects_bad_source_index():
    state = _state([_place("a")])
    with pytest.raises(OutOfRangeError):
        store.move(state, _move("pool", 3, "d1", 0))
    with pytest.raises(OutOfRangeError):
        store.move(state, _move("pool", -1, "d1", 0))


def test_move_rejects_unknown_day():
    state = _state([_place("a")])
    with pytest.raises(UnknownLocationError):
        store.move(state, _move("pool", 0, "nope", 0))
    with pytest.raises(UnknownLocationError):
        store.move(state, _move("nope", 0, "pool", 0))


def test_insert_place_promotes_only_for_days():
    candidate = PlaceCandidate(name="Night market", lat=25.05, lng=121.57)
    state = _state([_place("a")])

    into_pool = store.insert_place(state, candidate, Slot(location=PoolLocation(), index=0))
    assert into_pool.pool[0].name == "Night market"
    assert into_pool.pool[0].stay_minutes is None

    into_day = store.insert_place(state, candidate, Slot(location=DayLocation(day_id="d1"), index=5))
    assert into_day.days[0].places[0].stay_minutes == 60
    assert into_day.days[0].places[0].transport_to_next is TransportMode.CAR


def test_remove_at():
    state = _state([_place("a"), _place("b")], [_place("c")])
    assert _names(store.remove_at(state, PoolLocation(), 0).pool) == ["b"]
    assert store.remove_at(state, DayLocation(day_id="d1"), 0).days[0].places == ()
    with pytest.raises(OutOfRangeError):
        store.remove_at(state, DayLocation(day_id="d1"), 1)


def test_add_day_appends_labelled_day():
    state = store.add_day(_state())
    assert [d.title for d in state.days] == ["Day 1", "Day 2"]
    assert state.days[1].start_time == "09:00"
    assert state.days[1].id != state.days[0].id


def test_remove_only_day_is_forbidden():
    state = _state([], [_place("a")])
    assert store.remove_day(state, "d1") is state


def test_remove_day_discards_places_and_renumbers():
    state = _state([_place("p")], [_place("a")], [_place("b")], [_place("c")])
    removed = store.remove_day(state, "d1")
    assert [d.id for d in removed.days] == ["d2", "d3"]
    assert [d.title for d in removed.days] == ["Day 1", "Day 2"]
    assert _names(removed.pool) == ["p"]
    assert "a" not in [p.id for d in removed.days for p in d.places]


def test_remove_unknown_day_raises():
    with pytest.raises(UnknownLocationError):
        store.remove_day(_state(), "missing")


def test_reordering_days_keeps_titles():
    state = _state([], [], [], [])
    moved = store.move_day(state, "d3", 0)
    assert [d.id for d in moved.days] == ["d3", "d1", "d2"]
    assert [d.title for d in moved.days] == ["Day 3", "Day 1", "Day 2"]
    assert store.move_day(state, "d2", 1) is state


def test_update_place_merges_fields_and_keeps_identity():
    state = _state([], [_place("a", stay_minutes=60)])
    updated = store.update_place(state, "d1", 0, {"stay_minutes": 90, "transport_notes": "bus 307", "id": "zzz"})
    place = updated.days[0].places[0]
    assert place.id == "a"
    assert place.stay_minutes == 90
    assert place.transport_notes == "bus 307"
    assert place.name == "A"


def test_update_place_out_of_range():
    with pytest.raises(OutOfRangeError):
        store.update_place(_state(), "d1", 0, {"stay_minutes": 5})


def test_update_day_changes_start_time():
    updated = store.update_day(_state(), "d1", {"start_time": "10:30"})
    assert updated.days[0].start_time == "10:30"
    with pytest.raises(UnknownLocationError):
        store.update_day(_state(), "d9", {"start_time": "10:30"})


def test_update_place_rejects_values_of_the_wrong_type():
    state = _state([], [_place("a", stay_minutes=60)])
    for fields in ({"name": None}, {"estimated_time": 3}, {"transport_to_next": "boat"}, {"stay_minutes": 0}):
        with pytest.raises(InvalidFieldError) as info:
            store.update_place(state, "d1", 0, fields)
        assert info.value.field == next(iter(fields))


def test_update_day_rejects_missing_title():
    with pytest.raises(InvalidFieldError):
        store.update_day(_state(), "d1", {"title": None})
