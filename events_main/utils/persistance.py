# Durable key-value slots (JSON file / SQL table / memory) behind one interface.
# A slot holds raw text; parsing is the caller's job.

from __future__ import annotations
from pathlib import Path
import logging
import os
import time
from typing import Optional, Protocol

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from events_main.models.models_events import Base, SlotRow
from events_main.utils.config import CONFIG

logger = logging.getLogger(__name__)


class Slot(Protocol):
    def read(self) -> Optional[str]: ...

    def write(self, text: str) -> None: ...

    def clear(self) -> None: ...


# Naive lock via .lock file (good enough for single-user local use)
def _lock_path(p: Path) -> Path:
    return p.with_suffix(p.suffix + ".lock")


def _acquire_lock(p: Path, timeout: float = 3.0, poll: float = 0.05) -> None:
    lock = _lock_path(p)
    start = time.time()
    while lock.exists():
        if time.time() - start > timeout:
            # Stale lock from a crashed writer
            logger.warning("Removing stale lock %s", lock)
            try:
                lock.unlink()
            except FileNotFoundError:
                pass
            break
        time.sleep(poll)
    lock.touch(exist_ok=True)


def _release_lock(p: Path) -> None:
    try:
        _lock_path(p).unlink()
    except FileNotFoundError:
        pass


class JsonFileSlot:
    """Slot stored as a single file; missing file means an absent slot."""

    def __init__(self, path: str | Path, lock_timeout: float | None = None):
        self.path = Path(path)
        if lock_timeout is None:
            lock_timeout = CONFIG["storage"].get("lock_timeout_s", 3.0)
        self.lock_timeout = lock_timeout

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        _acquire_lock(self.path, timeout=self.lock_timeout)
        try:
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp, self.path)
        finally:
            _release_lock(self.path)

    def clear(self) -> None:
        if not self.path.exists():
            return
        _acquire_lock(self.path, timeout=self.lock_timeout)
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        finally:
            _release_lock(self.path)

    def __repr__(self) -> str:
        return f"JsonFileSlot({str(self.path)!r})"


class SqlSlot:
    """Slot stored as one row of the kv_slots table."""

    def __init__(self, database_url: str, name: str = "events"):
        self.name = name
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self.engine = create_engine(database_url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)
        Base.metadata.create_all(self.engine)

    def read(self) -> Optional[str]:
        with self.SessionLocal() as s:
            row = s.get(SlotRow, self.name)
            return row.value if row is not None else None

    def write(self, text: str) -> None:
        with self.SessionLocal() as s:
            row = s.get(SlotRow, self.name)
            if row is None:
                s.add(SlotRow(name=self.name, value=text))
            else:
                row.value = text
            s.commit()

    def clear(self) -> None:
        with self.SessionLocal() as s:
            row = s.get(SlotRow, self.name)
            if row is not None:
                s.delete(row)
                s.commit()

    def __repr__(self) -> str:
        return f"SqlSlot({str(self.engine.url)!r}, {self.name!r})"


class MemorySlot:
    def __init__(self, initial: Optional[str] = None):
        self.value = initial

    def read(self) -> Optional[str]:
        return self.value

    def write(self, text: str) -> None:
        self.value = text

    def clear(self) -> None:
        self.value = None

    def __repr__(self) -> str:
        return "MemorySlot()"


def open_slot(backend: str | None = None, name: str | None = None) -> Slot:
    """Build the configured slot. backend: file | sql | memory."""
    cfg = CONFIG["storage"]
    backend = backend or cfg.get("backend", "file")
    name = name or cfg.get("slot_name", "events")
    if backend == "file":
        return JsonFileSlot(Path(cfg.get("data_dir", "data")) / f"{name}.json")
    if backend == "sql":
        return SqlSlot(cfg["database_url"], name)
    if backend == "memory":
        return MemorySlot()
    raise ValueError(f"Unknown storage backend: {backend!r}")
