"""Group trip planning: itinerary ordering and shared-expense settlement."""

__version__ = "1.0.0"
