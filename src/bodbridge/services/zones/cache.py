"""File-backed, time-expiring cache of the Kai location -> zone mapping."""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any, Callable, Optional, Protocol

from ...errors import ZoneFileCorruptError
from .base import ZoneSource

logger = logging.getLogger(__name__)


class ZoneStorage(Protocol):
    def mtime(self) -> float | None: ...

    def read_text(self) -> str: ...

    def write_text(self, content: str) -> None: ...

    def delete(self) -> None: ...


def _decode_snapshot(text: str) -> dict[str, dict[str, Any]]:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"zone file must hold a JSON object, got {type(data).__name__}")
    for location, entry in data.items():
        if not isinstance(entry, dict):
            raise ValueError(f"zone entry for {location!r} is not an object")
    return data


class ZoneCache:
    """Resolves cabinet locations to Kai zone ids.

    The zone file is rebuilt from ``source`` when missing or older than ``expiration_seconds``.
    The parsed copy kept in memory is only trusted while it was loaded after the file's last
    modification and is itself younger than ``expiration_seconds``.
    """

    def __init__(
        self,
        storage: ZoneStorage,
        source: ZoneSource,
        expiration_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.storage = storage
        self.source = source
        self.expiration_seconds = expiration_seconds
        self.clock = clock
        self._snapshot: dict[str, dict[str, Any]] | None = None
        self._loaded_at: float | None = None
        self._lock = threading.RLock()

    def invalidate(self) -> None:
        with self._lock:
            self._snapshot = None
            self._loaded_at = None

    def refresh(self) -> None:
        """Rewrite the zone file in full from the zone source."""
        with self._lock:
            content = self.source.fetch()
            self.storage.write_text(content)
            self.invalidate()

    def _file_is_fresh(self, now: float) -> bool:
        mtime = self.storage.mtime()
        return mtime is not None and now - mtime < self.expiration_seconds

    def _memory_is_fresh(self, now: float) -> bool:
        if self._snapshot is None or self._loaded_at is None:
            return False
        mtime = self.storage.mtime()
        if mtime is None or self._loaded_at < mtime:
            return False
        return now - self._loaded_at < self.expiration_seconds

    def _load(self) -> None:
        attempts = 0
        while True:
            attempts += 1
            try:
                snapshot = _decode_snapshot(self.storage.read_text())
            except ValueError as exc:
                if attempts > 1:
                    raise ZoneFileCorruptError(f"Zonefile still unparseable after rebuilding: {exc}") from exc
                logger.error(f"Unparseable zonefile ({exc}); rebuilding...")
                self.storage.delete()
                self.refresh()
                continue
            self._snapshot = snapshot
            self._loaded_at = self.clock()
            logger.info(f"Zonefile recached ({len(snapshot)} locations)")
            return

    def snapshot(self) -> dict[str, dict[str, Any]]:
        """Return the current location -> zone record mapping, refreshing as needed."""
        with self._lock:
            if not self._file_is_fresh(self.clock()):
                self.refresh()
            if not self._memory_is_fresh(self.clock()):
                self._load()
            assert self._snapshot is not None
            return self._snapshot

    def resolve_zone(self, location: str) -> Optional[int]:
        entry = self.snapshot().get(location)
        if entry is None:
            self.refresh()
            entry = self.snapshot().get(location)
        if entry is None:
            logger.warning(f"Unable to find location named {location}")
            return None

        zone_id = entry.get("id")
        if zone_id is None:
            logger.warning(f"Zone entry for location {location} has no id")
            return None
        try:
            return int(zone_id)
        except (TypeError, ValueError):
            logger.warning(f"Zone entry for location {location} has non-numeric id {zone_id!r}")
            return None
