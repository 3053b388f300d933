from __future__ import annotations

from typing import Any, Dict, Optional


class HiervisError(Exception):
    """Base exception for all hierarchy normalization errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(HiervisError):
    """Options are contradictory or invalid; raised before any tree is built."""


class StructuralError(HiervisError):
    """The records do not describe a single well-formed tree."""

    def __init__(self, message: str, kind: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.kind = kind


class UnsupportedInputError(HiervisError):
    pass


class MissingFieldError(HiervisError):
    def __init__(self, field: str, record: Optional[int] = None, message: Optional[str] = None):
        details: Dict[str, Any] = {"field": field}
        if record is not None:
            details["record"] = record
        super().__init__(message or f"field '{field}' is missing", details)
        self.field = field
        self.record = record


class InvalidValueError(HiervisError):
    """A value field holds something that is not a non-negative number."""
