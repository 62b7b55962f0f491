from __future__ import annotations

"""
Exceptions raised while reading, validating and writing Release files.

A parse either succeeds completely or raises one of these; no partially
populated record is ever returned.
"""


class ReleaseError(Exception):
    """Base class for all Release codec errors."""


class StreamError(ReleaseError, OSError):
    """Reading from or writing to the underlying stream failed."""


class MalformedFieldError(ReleaseError, ValueError):
    """A field value does not match its local grammar (hex, integer, date, boolean)."""

    def __init__(
        self, field: str, value: str, reason: str, line_number: int | None = None
    ) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Malformed {field}{location}: {reason}: {value!r}")


class ReleaseValidationError(ReleaseError, ValueError):
    """A parsed record violates a semantic rule of the Release format."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class SerializeError(ReleaseError):
    """A record cannot be rendered as Release text."""
