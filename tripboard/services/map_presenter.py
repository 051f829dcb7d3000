"""Payload for the map collaborator: ordered markers and the path joining them."""

from __future__ import annotations

from typing import Any

from tripboard.domain.models import Day


def present_route(day: Day) -> dict[str, Any]:
    markers = [
        {
            "order": position,
            "place_id": place.id,
            "name": place.name,
            "description": place.description,
            "lat": place.coordinates.lat,
            "lng": place.coordinates.lng,
        }
        for position, place in enumerate(day.places, start=1)
    ]
    return {
        "day_id": day.id,
        "title": day.title,
        "markers": markers,
        "path": [[m["lat"], m["lng"]] for m in markers],
    }


__all__ = ["present_route"]
