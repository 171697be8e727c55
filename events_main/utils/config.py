# Config flags and runtime settings (env overrides come from .env)

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


CONFIG = {
    "debug_mode": _env_flag("EVENTS_DEBUG", False),

    # Durable slot holding the serialized event list
    "storage": {
        "backend": os.getenv("EVENTS_BACKEND", "file"),   # file | sql | memory
        "slot_name": os.getenv("EVENTS_SLOT_NAME", "events"),
        "data_dir": os.getenv("EVENTS_DATA_DIR", "data"),
        "database_url": os.getenv("DATABASE_URL", "sqlite:///./events.db"),
        "lock_timeout_s": 3.0,
    },

    # Form rules for new events
    "validation": {
        "name_min": 2,
        "name_max": 100,
        "min_date": "1900-01-01",
    },

    # Simulated latency between a validated submit and its commit
    "submission": {
        "delay_ms": int(os.getenv("EVENTS_SUBMIT_DELAY_MS", "800")),
    },

    # Notices (toasts): console echo + optional JSON Lines outbox
    "delivery": {
        "console_echo": True,
        "enabled": _env_flag("EVENTS_OUTBOX_ENABLED", False),
        "outbox_path": os.getenv("EVENTS_OUTBOX_PATH", "outbox/notices.jsonl"),
    },
}
