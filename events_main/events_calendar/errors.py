"""Domain errors for the event manager."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class ErrorCode(Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CORRUPT_STATE = "CORRUPT_STATE"
    SUBMISSION_PENDING = "SUBMISSION_PENDING"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


@dataclass(eq=False)
class EventValidationError(DomainError):
    """Raised when submitted input fails one or more field rules."""

    field_errors: Dict[str, str] = field(default_factory=dict)

    def __init__(self, field_errors: Dict[str, str]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="; ".join(f"{k}: {v}" for k, v in field_errors.items()),
        )
        self.field_errors = dict(field_errors)


@dataclass(eq=False)
class CorruptStateError(DomainError):
    """Raised when the durable slot exists but does not hold a record list."""

    detail: str = ""

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            code=ErrorCode.CORRUPT_STATE,
            message="Failed to load saved events",
        )
        self.detail = detail


@dataclass(eq=False)
class SubmissionPendingError(DomainError):
    """Raised when a submission arrives while another is still pending."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SUBMISSION_PENDING,
            message="An event is already being added",
        )
