# Form validation for new events: name + date, field-scoped messages.

from __future__ import annotations
from datetime import date as Date, datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from events_main.events_calendar.errors import EventValidationError
from events_main.models.records import ISO_DATE, ValidatedEvent, format_long_date
from events_main.utils.config import CONFIG

NAME_REQUIRED = "Event name is required."
NAME_EMPTY = "Event name cannot be empty."
DATE_REQUIRED = "Please select a date for the event."
DATE_INVALID = "Please enter a valid date."


def _name_too_short(n: int) -> str:
    return f"Event name must be at least {n} characters."


def _name_too_long(n: int) -> str:
    return f"Event name must be less than {n} characters."


class EventForm(BaseModel):
    name: Any = Field(default=None, validate_default=True)
    date: Optional[Date] = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, v):
        rules = CONFIG["validation"]
        if not isinstance(v, str):
            raise PydanticCustomError("name_required", NAME_REQUIRED)
        trimmed = v.strip()
        if not trimmed:
            raise PydanticCustomError("name_empty", NAME_EMPTY)
        if len(trimmed) < rules["name_min"]:
            raise PydanticCustomError("name_too_short", _name_too_short(rules["name_min"]))
        if len(trimmed) > rules["name_max"]:
            raise PydanticCustomError("name_too_long", _name_too_long(rules["name_max"]))
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _check_date(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("date_required", DATE_REQUIRED)
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, Date):
            return v
        if isinstance(v, str):
            text = v.strip()
            if not ISO_DATE.fullmatch(text):
                raise PydanticCustomError("date_invalid", DATE_INVALID)
            try:
                return Date.fromisoformat(text)
            except ValueError:
                raise PydanticCustomError("date_invalid", DATE_INVALID)
        raise PydanticCustomError("date_invalid", DATE_INVALID)

    @field_validator("date")
    @classmethod
    def _not_before_min(cls, v: Date) -> Date:
        floor = Date.fromisoformat(CONFIG["validation"]["min_date"])
        if v < floor:
            raise PydanticCustomError(
                "date_too_early",
                "Event date must be on or after {floor}.",
                {"floor": format_long_date(floor)},
            )
        return v


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("__root__",)
        key = str(loc[0])
        # First message per field wins
        out.setdefault(key, err.get("msg", "Invalid value."))
    return out


def validate_event(candidate: Mapping[str, Any]) -> ValidatedEvent:
    """Check raw form input; raise EventValidationError keyed by field."""
    try:
        form = EventForm.model_validate(dict(candidate))
    except ValidationError as e:
        raise EventValidationError(_field_errors(e)) from None
    return ValidatedEvent(name=form.name, date=form.date)
