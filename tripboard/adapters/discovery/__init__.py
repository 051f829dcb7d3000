"""Place-discovery adapters."""

from tripboard.adapters.discovery.interfaces import DiscoveryQuery, DiscoveryTool

__all__ = ["DiscoveryQuery", "DiscoveryTool"]
