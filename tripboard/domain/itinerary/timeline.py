"""Visit timeline for a day's ordered places."""

from __future__ import annotations

from collections.abc import Sequence

from tripboard.domain.constants import DEFAULT_STAY_MINUTES, MINUTES_PER_DAY
from tripboard.domain.itinerary.fields import format_clock, parse_clock
from tripboard.domain.models import Day, Place, TimelineEntry


def compute_timeline(start_time: str, places: Sequence[Place]) -> list[TimelineEntry]:
    """Arrival/departure per stop.

    Clock strings wrap past midnight; ``day_offset`` counts how many
    midnights the arrival has crossed so callers can label a rollover.
    """
    cursor = parse_clock(start_time)
    entries: list[TimelineEntry] = []
    for place in places:
        start = cursor
        end = start + (place.stay_minutes if place.stay_minutes is not None else DEFAULT_STAY_MINUTES)
        entries.append(
            TimelineEntry(
                place_id=place.id,
                start=format_clock(start),
                end=format_clock(end),
                day_offset=start // MINUTES_PER_DAY,
            )
        )
        cursor = end + (place.travel_minutes_to_next or 0)
    return entries


def day_timeline(day: Day) -> list[TimelineEntry]:
    return compute_timeline(day.start_time, day.places)


__all__ = ["compute_timeline", "day_timeline"]
