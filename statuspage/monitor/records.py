"""Status records: the per-target state machine persisted as JSON.

A record only ever holds the current status plus two timestamps:
`created` (when the current status began) and `updated` (last check).
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SystemStatus(str, Enum):
    GREEN = "Green"
    YELLOW = "Yellow"  # reserved, no probe produces it yet
    RED = "Red"

    @property
    def code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {SystemStatus.GREEN: 1, SystemStatus.YELLOW: 2, SystemStatus.RED: 3}


def current_time_seconds() -> int:
    return int(time.time())


@dataclass
class SystemRecord:
    """Latest observed status of one monitored target."""

    id: str
    status: SystemStatus = SystemStatus.GREEN
    created: int = 0  # 0 = never observed
    updated: int = 0

    @classmethod
    def new(cls, target_id: str) -> "SystemRecord":
        return cls(id=target_id)

    def apply_observation(self, observed: SystemStatus, now: int) -> "SystemRecord":
        """Fold one observation into the record.

        `created` moves only on a transition (or the first observation),
        `updated` moves on every call.
        """
        if observed != self.status or self.created == 0:
            self.status = observed
            self.created = now
        self.updated = now
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "updated": self.updated,
            "created": self.created,
        }

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SystemRecord":
        return cls(
            id=data["id"],
            status=SystemStatus(data["status"]),
            created=int(data["created"]),
            updated=int(data["updated"]),
        )

    @classmethod
    def from_json(cls, raw: bytes | str) -> "SystemRecord":
        return cls.from_dict(json.loads(raw))
