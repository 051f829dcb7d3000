"""Presentation services built on session views."""

from tripboard.services.export_formatter import export_markdown
from tripboard.services.map_presenter import present_route

__all__ = ["export_markdown", "present_route"]
