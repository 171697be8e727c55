from __future__ import annotations

from datetime import date as Date
import re
from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

# Canonical day form, ASCII digits only
ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class EventRecord(BaseModel):
    """One persisted event. Serialized as {id, name, date}."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    date: str = Field(..., pattern=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$", description="YYYY-MM-DD")

    @field_validator("date")
    @classmethod
    def _real_calendar_day(cls, v: str) -> str:
        Date.fromisoformat(v)  # rejects 2024-02-30 etc.
        return v

    @property
    def day(self) -> Date:
        return Date.fromisoformat(self.date)


class ValidatedEvent(BaseModel):
    """Form input that passed validation; name is kept as submitted."""

    model_config = ConfigDict(frozen=True)

    name: str
    date: Date


RecordList = TypeAdapter(List[EventRecord])


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: Date | str) -> str:
    """2024-05-01 -> 'May 1st, 2024'."""
    if isinstance(value, str):
        value = Date.fromisoformat(value)
    return f"{_MONTHS[value.month - 1]} {_ordinal(value.day)}, {value.year}"
