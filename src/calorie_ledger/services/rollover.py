"""Periodic day-boundary checks."""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from calorie_ledger.domain.errors import StorageError
from calorie_ledger.services.ledger import LedgerService

logger = logging.getLogger(__name__)


@dataclass
class RolloverScheduler:
    """Calls the ledger's rollover check on a fixed interval."""

    ledger_service: LedgerService
    interval_seconds: float = 60.0
    clock: Callable[[], datetime] = lambda: datetime.now(tz=UTC)

    async def tick(self) -> bool:
        """Run one rollover check, logging storage failures."""
        try:
            return await self.ledger_service.rollover_if_needed(self.clock())
        except StorageError:
            logger.exception("Rollover check failed")
            return False

    async def run(self, stop: asyncio.Event) -> None:
        """Check for rollover until the stop event is set."""
        while not stop.is_set():
            await self.tick()
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(stop.wait(), timeout=self.interval_seconds)
