"""File-based persistence for the zone snapshot."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..config import settings


class ZoneFileStorage:
    """Thin wrapper around the zone file; its mtime is the freshness signal."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path or settings.zonefile)

    def mtime(self) -> float | None:
        try:
            return self.path.stat().st_mtime
        except FileNotFoundError:
            return None

    def read_text(self) -> str:
        with self.path.open("r", encoding="utf-8") as handle:
            return handle.read()

    def write_text(self, content: str) -> None:
        """Replace the whole file; readers see either the old or the new content."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.path.parent, prefix=f"{self.path.name}.", suffix=".tmp", delete=False
        ) as handle:
            handle.write(content)
            tmp_path = handle.name
        os.replace(tmp_path, self.path)

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)
