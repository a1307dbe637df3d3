"""
Typed errors raised by the date conversion functions
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_NEPALI_DATE = 'INVALID_NEPALI_DATE'
    INVALID_ENGLISH_DATE = 'INVALID_ENGLISH_DATE'
    OUT_OF_RANGE = 'OUT_OF_RANGE'


class DateConversionError(ValueError):
    """
    Raised when a BS or AD date cannot be converted, validated or looked up.

    Attributes:
        kind: one of the ErrorKind values
        message: human readable summary
        details: optional extra context (the offending date, the wrapped error)
    """

    def __init__(self, kind: ErrorKind, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message

    def __repr__(self):
        return f"DateConversionError({self.kind.value}, {self.message!r}, {self.details!r})"

    def to_dict(self) -> dict:
        return {
            'kind': self.kind.value,
            'message': self.message,
            'details': self.details,
        }
