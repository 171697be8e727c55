# Build user-facing notices (toasts) for store outcomes.
# This does NOT display anything; see core/delivery.py.

from __future__ import annotations
from typing import Dict

from events_main.models.records import EventRecord, format_long_date


def _notice(level: str, title: str, description: str = "") -> Dict:
    return {"level": level, "title": title, "description": description}


def added_notice(ev: EventRecord) -> Dict:
    return _notice(
        "success",
        "Event added successfully!",
        f"{ev.name} scheduled for {format_long_date(ev.date)}",
    )


def deleted_notice(ev: EventRecord) -> Dict:
    return _notice("success", "Event deleted successfully!", f"{ev.name} has been removed")


def load_failed_notice() -> Dict:
    return _notice("warning", "Failed to load saved events",
                   "Starting with an empty list; saved data was left as is.")
