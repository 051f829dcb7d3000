"""Shared cross-layer types and exceptions."""

from tripboard.shared.exceptions import KeyMissingError, ToolError

__all__ = ["ToolError", "KeyMissingError"]
