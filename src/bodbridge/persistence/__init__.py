"""Local persistence."""

from .filesystem import ZoneFileStorage

__all__ = ["ZoneFileStorage"]
