"""Plan export renderers."""

from __future__ import annotations

from tripboard.application.session import TripSession
from tripboard.application.views import session_balances, session_settlements
from tripboard.domain.itinerary.timeline import day_timeline
from tripboard.domain.models import Day, Place


def _inline(value: object) -> str:
    return str(value or "").strip().replace("\n", " ").replace("\r", " ")


def _money(value: float) -> str:
    return f"{value:,.2f}"


def _format_leg(place: Place) -> str:
    mode = place.transport_to_next.value if place.transport_to_next else "CAR"
    line = f"  - then {mode.lower()} ~{place.travel_minutes_to_next or 0} min"
    notes = _inline(place.transport_notes)
    return f"{line} ({notes})" if notes else line


def _format_day(day: Day) -> list[str]:
    lines = [f"## {day.title} (starts {day.start_time})"]
    if not day.places:
        lines.append("- No places yet")
        lines.append("")
        return lines

    timeline = day_timeline(day)
    last = len(day.places) - 1
    for index, (place, slot) in enumerate(zip(day.places, timeline)):
        rollover = f" (+{slot.day_offset}d)" if slot.day_offset else ""
        lines.append(f"- {slot.start}-{slot.end}{rollover} {_inline(place.name)}")
        if index < last:
            lines.append(_format_leg(place))
    lines.append("")
    return lines


def export_markdown(session: TripSession) -> str:
    lines: list[str] = ["# Trip plan", ""]
    for day in session.itinerary.days:
        lines.extend(_format_day(day))

    if session.itinerary.pool:
        lines.append("## Unscheduled")
        lines.extend(f"- {_inline(place.name)}" for place in session.itinerary.pool)
        lines.append("")

    ledger = session.ledger
    lines.append("## Expenses")
    if not ledger.expenses:
        lines.append("- No expenses recorded")
    for expense in ledger.expenses:
        lines.append(
            f"- {_inline(expense.description)}: {_money(expense.amount)} paid by {expense.payer}, "
            f"split {len(expense.involved)} ways"
        )
    lines.append("")

    lines.append("## Balances")
    lines.extend(f"- {name}: {_money(value)}" for name, value in session_balances(session).items())
    lines.append("")

    lines.append("## Settlement")
    plan = session_settlements(session)
    if not plan:
        lines.append("- Everyone is square")
    lines.extend(f"- {s.from_participant} pays {s.to} {_money(s.amount)}" for s in plan)
    return "\n".join(lines).rstrip() + "\n"


__all__ = ["export_markdown"]
