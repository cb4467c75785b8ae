"""Checker tasks — one periodic probe loop per monitored target.

Each tick: probe → classify → apply observation → persist → log.
The task owns its SystemRecord outright; nothing else mutates it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .prober import DEFAULT_TIMEOUT, classify, probe
from .records import SystemRecord, SystemStatus, current_time_seconds
from .store import StatusStore

if TYPE_CHECKING:
    from statuspage.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30.0


@dataclass(frozen=True)
class Target:
    """An externally monitored endpoint."""

    id: str
    url: str
    timeout: float = DEFAULT_TIMEOUT


DEFAULT_TARGETS: tuple[Target, ...] = (
    Target(id="website", url="https://wavy.fm"),
    Target(id="api", url="https://api.wavy.fm/healthz"),
)


class CheckerTask:
    """Periodically probes one target and persists its status record.

    Lifecycle:
        checker = CheckerTask(target, store)
        await checker.run()   # never returns on its own
    """

    def __init__(
        self,
        target: Target,
        store: StatusStore,
        interval: float = DEFAULT_INTERVAL,
        classifier: Callable[[int], SystemStatus] = classify,
        probe: Callable[[str, float], int] = probe,
        clock: Callable[[], int] = current_time_seconds,
    ) -> None:
        self.target = target
        self.store = store
        self.interval = interval
        self.classifier = classifier
        self._probe = probe
        self._clock = clock
        self.record = SystemRecord.new(target.id)

    @property
    def id(self) -> str:
        return self.target.id

    async def check_once(self) -> SystemRecord:
        """Run a single probe and persist the resulting record.

        Raises StatusPersistError if the record cannot be written.
        """
        loop = asyncio.get_running_loop()

        code = await loop.run_in_executor(
            None, self._probe, self.target.url, self.target.timeout,
        )
        observed = self.classifier(code)
        self.record.apply_observation(observed, self._clock())

        await loop.run_in_executor(None, self.store.persist, self.record)

        logger.info(
            "Checked %s: status=%s created=%d updated=%d (HTTP %d)",
            self.record.id, self.record.status.value,
            self.record.created, self.record.updated, code,
        )
        return self.record

    async def run(self) -> None:
        """Tick forever: first check at launch, then every `interval` seconds."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time()

        while True:
            delay = next_tick - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)

            await self.check_once()

            next_tick += self.interval
            # A check that overran its slot skips the missed ticks
            while next_tick <= loop.time():
                next_tick += self.interval


def build_checkers(
    settings: Settings,
    store: StatusStore,
    targets: Sequence[Target] = DEFAULT_TARGETS,
) -> list[CheckerTask]:
    """One CheckerTask per target, timing taken from settings."""
    return [
        CheckerTask(
            replace(target, timeout=settings.probe_timeout),
            store,
            interval=settings.check_interval,
        )
        for target in targets
    ]
