"""Pytest configuration and shared fixtures."""

import pytest

from events_main.events_calendar.calendar import EventStore
from events_main.utils.config import CONFIG
from events_main.utils.persistance import MemorySlot

FIXED_MS = 1_714_000_000_000


class CountingSlot(MemorySlot):
    """MemorySlot that records how often it was written or cleared."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = 0
        self.clears = 0

    def write(self, text):
        self.writes += 1
        super().write(text)

    def clear(self):
        self.clears += 1
        super().clear()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setitem(CONFIG["storage"], "backend", "file")
    monkeypatch.setitem(CONFIG["storage"], "data_dir", str(tmp_path / "data"))
    monkeypatch.setitem(CONFIG["storage"], "database_url", f"sqlite:///{tmp_path / 'events.db'}")
    monkeypatch.setitem(CONFIG["delivery"], "enabled", False)
    monkeypatch.setitem(CONFIG["delivery"], "outbox_path", str(tmp_path / "outbox" / "notices.jsonl"))
    monkeypatch.setitem(CONFIG["submission"], "delay_ms", 0)


@pytest.fixture
def slot() -> CountingSlot:
    return CountingSlot()


@pytest.fixture
def store(slot) -> EventStore:
    # Frozen clock: every id comes from the uniqueness bump
    return EventStore(slot, clock=lambda: FIXED_MS)
