"""Status store — one JSON file per target under the status directory.

Writes go to a temp file in the same directory and are renamed over the
target path, so the file server never hands out a half-written record.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from .records import SystemRecord

logger = logging.getLogger(__name__)


class StatusPersistError(OSError):
    """Raised when a status record cannot be written to disk."""


class StatusStore:
    """File-backed storage for the latest SystemRecord of each target."""

    def __init__(self, status_dir: Path | str) -> None:
        self._dir = Path(status_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, target_id: str) -> Path:
        return self._dir / f"{target_id}.json"

    def persist(self, record: SystemRecord) -> Path:
        """Replace `<id>.json` with the serialized record."""
        path = self.path_for(record.id)
        payload = record.to_json()
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{record.id}.", suffix=".tmp", dir=self._dir,
            )
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StatusPersistError(e.errno, f"Failed to write {path}: {e.strerror or e}") from e

        logger.debug("Wrote %s (%d bytes)", path, len(payload))
        return path

    def load(self, target_id: str) -> SystemRecord | None:
        """Read back a persisted record, or None if it was never written."""
        path = self.path_for(target_id)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        return SystemRecord.from_json(raw)
