"""Checker scheduler — runs every CheckerTask concurrently on the event loop.

A task that dies (e.g. the status directory became unwritable) is logged
and reported as failed; the remaining checkers keep running.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .checker import CheckerTask

logger = logging.getLogger(__name__)


class CheckerScheduler:
    """Owns the asyncio tasks backing each CheckerTask."""

    def __init__(self, checkers: list[CheckerTask]) -> None:
        self.checkers = checkers
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._errors: dict[str, str] = {}
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Launch one task per checker."""
        if self._running:
            return
        self._running = True

        if not self.checkers:
            logger.info("No targets configured — scheduler idle")
            return

        for checker in self.checkers:
            task = asyncio.create_task(checker.run(), name=f"checker-{checker.id}")
            task.add_done_callback(self._on_task_done)
            self._tasks[checker.id] = task

        logger.info(
            "Checker scheduler started: %s (every %ss)",
            ", ".join(self._tasks),
            self.checkers[0].interval,
        )

    async def stop(self) -> None:
        """Cancel all checker loops."""
        self._running = False
        for task in self._tasks.values():
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks.values(), return_exceptions=True)
        self._tasks.clear()
        logger.info("Checker scheduler stopped")

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        target_id = task.get_name().removeprefix("checker-")
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        self._errors[target_id] = f"{type(exc).__name__}: {exc}"
        logger.error(
            "Checker %s stopped; other checkers keep running",
            target_id, exc_info=(type(exc), exc, exc.__traceback__),
        )

    def status(self) -> dict[str, Any]:
        """Per-checker task state for the /healthz endpoint."""
        checkers: dict[str, dict[str, Any]] = {}
        for checker in self.checkers:
            task = self._tasks.get(checker.id)
            if task is None:
                state = "stopped"
            elif not task.done():
                state = "running"
            elif task.cancelled():
                state = "stopped"
            else:
                state = "failed" if checker.id in self._errors else "stopped"
            checkers[checker.id] = {
                "state": state,
                "url": checker.target.url,
                "error": self._errors.get(checker.id),
            }

        healthy = bool(checkers) and all(c["state"] == "running" for c in checkers.values())
        return {"ok": healthy, "checkers": checkers}
