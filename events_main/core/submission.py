# Delayed commit of validated submissions (simulated latency for UX feedback).
# One submission may be pending at a time; the front end can cancel it.

from __future__ import annotations
import asyncio
import logging
from typing import Optional

from events_main.events_calendar.calendar import EventStore
from events_main.events_calendar.errors import SubmissionPendingError
from events_main.models.records import EventRecord, ValidatedEvent
from events_main.utils.config import CONFIG

logger = logging.getLogger(__name__)


class Submitter:
    def __init__(self, store: EventStore, delay_ms: Optional[int] = None):
        self.store = store
        if delay_ms is None:
            delay_ms = CONFIG["submission"].get("delay_ms", 800)
        self.delay_s = max(0, delay_ms) / 1000.0
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _commit(self, validated: ValidatedEvent) -> EventRecord:
        await asyncio.sleep(self.delay_s)
        return self.store.add(validated)

    async def submit(self, validated: ValidatedEvent) -> EventRecord:
        """Wait the configured delay, then add. Raises SubmissionPendingError
        if another submission is in flight; raises CancelledError if cancel()
        is called first (nothing is added in that case)."""
        if self.pending:
            raise SubmissionPendingError()
        task = self._task = asyncio.create_task(self._commit(validated))
        try:
            return await task
        finally:
            # A follow-up submission may have replaced it
            if self._task is task:
                self._task = None

    def cancel(self) -> bool:
        if not self.pending:
            return False
        logger.info("Cancelling pending submission")
        return self._task.cancel()
