"""Zone sources that produce fresh zone file content."""

from __future__ import annotations

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Protocol

from ...errors import ZoneSourceError
from ...models.domain import ZoneEntry

logger = logging.getLogger(__name__)


class ZoneLister(Protocol):
    def list_zones(self) -> list[ZoneEntry]: ...


class ZoneSource(ABC):
    """Contract for zone file producers."""

    @abstractmethod
    def fetch(self) -> str:
        """Return the complete zone file text, a JSON object keyed by location code."""
        raise NotImplementedError


class CommandZoneSource(ZoneSource):
    """Run a site-provided executable and use its stdout as the zone file."""

    def __init__(self, path: Path, timeout: float | None = None) -> None:
        self.path = Path(path)
        self.timeout = timeout

    def fetch(self) -> str:
        logger.info(f"Updating zonefile from script at {self.path}")
        try:
            completed = subprocess.run(
                [str(self.path)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ZoneSourceError(f"Zonefile script {self.path} could not be run: {exc}") from exc
        if completed.returncode != 0:
            raise ZoneSourceError(
                f"Zonefile script {self.path} exited with status {completed.returncode}: {completed.stderr.strip()}"
            )
        return completed.stdout


class ApiZoneSource(ZoneSource):
    """Build the zone file from the Kai zone list."""

    def __init__(self, client: ZoneLister) -> None:
        self.client = client

    def fetch(self) -> str:
        logger.info("Updating zonefile from API")
        zones = {zone.description: zone.to_dict() for zone in self.client.list_zones()}
        return json.dumps(zones, ensure_ascii=False)


class FallbackZoneSource(ZoneSource):
    """Try ``primary`` and fall back to ``fallback`` when it fails."""

    def __init__(self, primary: ZoneSource, fallback: ZoneSource) -> None:
        self.primary = primary
        self.fallback = fallback

    def fetch(self) -> str:
        try:
            return self.primary.fetch()
        except ZoneSourceError as exc:
            logger.warning(f"{exc}; falling back to {type(self.fallback).__name__}")
            return self.fallback.fetch()
