"""Itinerary ordering: place identity, day sequences and timelines."""

from tripboard.domain.itinerary import fields, registry, store
from tripboard.domain.itinerary.timeline import compute_timeline, day_timeline

__all__ = ["compute_timeline", "day_timeline", "fields", "registry", "store"]
