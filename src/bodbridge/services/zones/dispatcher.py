"""Factory for the zone source based on configuration."""

from __future__ import annotations

import os
from pathlib import Path

from ...config import Settings, settings as default_settings
from .base import ApiZoneSource, CommandZoneSource, FallbackZoneSource, ZoneLister, ZoneSource


def _is_executable(path: Path | None) -> bool:
    return path is not None and path.is_file() and os.access(path, os.X_OK)


def get_zone_source(client: ZoneLister, settings: Settings | None = None) -> ZoneSource:
    config = settings or default_settings
    api_source = ApiZoneSource(client)
    if _is_executable(config.zonefile_script):
        command_source = CommandZoneSource(
            config.zonefile_script, timeout=config.zonefile_script_timeout_seconds
        )
        return FallbackZoneSource(command_source, api_source)
    return api_source
