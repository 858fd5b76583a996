"""Response envelope returned by every RecordStore call.

Mirrors the ``{success, data, message}`` body of the borrower REST
backend so the views handle store replies one way, whatever the transport.
"""
from dataclasses import dataclass
from typing import Any, Optional


class ErrorType:
    """Failure categories carried in ``Result.error_type``."""
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    DATABASE = "DATABASE"


@dataclass
class Result:
    """Outcome of one store call.

    Attributes:
        success: True when the call completed.
        data: Payload of a successful call (records, new id, or None).
        message: Human-readable failure reason; None on success.
        error_type: One of the ErrorType constants on failure.
    """
    success: bool
    data: Any = None
    message: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, data=None) -> 'Result':
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str, error_type: str = None) -> 'Result':
        return cls(success=False, message=message, error_type=error_type)

    def __bool__(self) -> bool:
        return self.success
