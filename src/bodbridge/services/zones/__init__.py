"""Zone resolution and zone file maintenance."""

from .base import ApiZoneSource, CommandZoneSource, FallbackZoneSource, ZoneSource
from .cache import ZoneCache
from .dispatcher import get_zone_source

__all__ = [
    "ZoneSource",
    "CommandZoneSource",
    "ApiZoneSource",
    "FallbackZoneSource",
    "ZoneCache",
    "get_zone_source",
]
