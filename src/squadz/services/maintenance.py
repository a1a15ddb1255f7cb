"""Periodic cleanup of expired sessions and stale locations."""

import asyncio
import logging
from dataclasses import dataclass, field

from squadz.services.locations import LocationCache
from squadz.services.sessions import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    """Counts removed by a single cleanup sweep."""

    expired_sessions: int
    stale_locations: int


@dataclass
class CleanupScheduler:
    """Runs the store sweeps on a fixed interval."""

    sessions: SessionStore
    locations: LocationCache
    interval_secs: float = 60
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    def run_once(self) -> SweepResult:
        """Run both sweeps immediately."""
        return SweepResult(
            expired_sessions=self.sessions.cleanup_expired(),
            stale_locations=self.locations.cleanup_stale(),
        )

    def start(self) -> None:
        """Start the background sweep loop on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_secs)
            try:
                result = self.run_once()
            except Exception:
                logger.exception("Cleanup sweep failed")
                continue
            logger.debug(
                "Cleanup sweep removed %s sessions and %s locations",
                result.expired_sessions,
                result.stale_locations,
            )
