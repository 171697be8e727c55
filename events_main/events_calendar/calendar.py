# Local event list: ordered by date, persisted whole to one durable slot.

from __future__ import annotations
import bisect
import json
import logging
import time
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from events_main.events_calendar.errors import CorruptStateError
from events_main.models.records import EventRecord, RecordList, ValidatedEvent
from events_main.utils.debug import debug_log
from events_main.utils.persistance import Slot, open_slot

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _date_key(ev: EventRecord) -> str:
    return ev.date


def parse_records(raw: str) -> List[EventRecord]:
    """Decode a slot payload into records. Raises CorruptStateError."""
    try:
        records = RecordList.validate_json(raw)
    except ValidationError as e:
        raise CorruptStateError(str(e)) from e
    seen = set()
    for ev in records:
        if ev.id in seen:
            raise CorruptStateError(f"duplicate id {ev.id!r}")
        seen.add(ev.id)
    return records


def dump_records(records) -> str:
    return json.dumps([ev.model_dump() for ev in records], indent=2, ensure_ascii=False)


class EventStore:
    """Owns the ordered event list and its durable slot.

    The list is always sorted by date (YYYY-MM-DD); records sharing a date
    keep their insertion order. Every mutation rewrites the whole slot, and an
    empty list is never written: the slot is cleared instead.
    """

    def __init__(self, slot: Optional[Slot] = None, clock: Callable[[], int] = _now_ms):
        self.slot = slot if slot is not None else open_slot()
        self._clock = clock
        self._events: List[EventRecord] = []
        self._last_id = 0

    # ---------- Snapshot ----------
    @property
    def events(self) -> Tuple[EventRecord, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def get(self, event_id: str) -> Optional[EventRecord]:
        for ev in self._events:
            if ev.id == event_id:
                return ev
        return None

    # ---------- Persistence ----------
    def load(self) -> Tuple[EventRecord, ...]:
        """Replace the in-memory list with the slot contents.

        An absent slot yields an empty list and nothing is written back. A slot
        that does not hold a record list empties the in-memory list, leaves the
        slot untouched and raises CorruptStateError.
        """
        try:
            raw = self.slot.read()
        except UnicodeDecodeError as e:
            self._events = []
            raise CorruptStateError(str(e)) from e
        if raw is None:
            self._events = []
            return self.events
        try:
            records = parse_records(raw)
        except CorruptStateError as e:
            self._events = []
            logger.warning("Ignoring unreadable event slot %r: %s", self.slot, e.detail)
            raise
        self._events = sorted(records, key=_date_key)
        numeric = [int(ev.id) for ev in records if ev.id.isascii() and ev.id.isdigit()]
        self._last_id = max([self._last_id] + numeric)
        debug_log("Loaded %d event(s) from %r", len(self._events), self.slot)
        return self.events

    def save(self) -> None:
        if not self._events:
            self.slot.clear()
            return
        self.slot.write(dump_records(self._events))

    # ---------- Mutations ----------
    def _next_id(self) -> str:
        candidate = max(self._clock(), self._last_id + 1)
        taken = {ev.id for ev in self._events}
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    def add(self, validated: ValidatedEvent) -> EventRecord:
        ev = EventRecord(
            id=self._next_id(),
            name=validated.name.strip(),
            date=validated.date.isoformat(),
        )
        # insort_right keeps same-date records in insertion order
        bisect.insort_right(self._events, ev, key=_date_key)
        self.save()
        logger.info("Added event %s (%s on %s)", ev.id, ev.name, ev.date)
        return ev

    def delete(self, event_id: str) -> bool:
        remaining = [ev for ev in self._events if ev.id != event_id]
        if len(remaining) == len(self._events):
            return False
        self._events = remaining
        self.save()
        logger.info("Deleted event %s", event_id)
        return True
