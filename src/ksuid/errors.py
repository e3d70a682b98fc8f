"""
errors.py - Domain-specific exceptions for ksuid.

All exceptions inherit from KsuidError for unified handling.
Each exception type represents a distinct failure mode.
"""

from typing import Any


class KsuidError(Exception):
    """Base exception for all ksuid errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message


class ValidationError(KsuidError):
    """
    Raised when input validation fails.

    This includes malformed base 62 text, unconvertible values and
    buffers or integers that don't fit the identifier layout.
    """

    def __init__(
        self, message: str, field: str | None = None, value: Any = None
    ) -> None:
        context = {}
        if field is not None:
            context["field"] = field
        if value is not None:
            context["value"] = repr(value)[:100]
        super().__init__(message, context=context)
        self.field = field
        self.value = value


class Base62Error(ValidationError):
    """Raised when text contains a character outside the base 62 alphabet."""

    def __init__(self, text: str) -> None:
        super().__init__(f"{text} is not a base 62 number", field="base62")
        self.text = text


class ConversionError(ValidationError):
    """
    Raised when a value cannot be converted into an identifier.

    The message names the type and representation of the offending value.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message, field="value", value=value)


class MalformedBufferError(ValidationError):
    """
    Raised when a binary identifier has the wrong length.

    Identifiers are always exactly 20 bytes; anything else is rejected
    rather than silently truncated.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Identifier buffer must be {expected} bytes, got {actual}",
            field="buffer",
        )
        self.context["expected"] = expected
        self.context["actual"] = actual
        self.expected = expected
        self.actual = actual


class TimestampRangeError(ValidationError):
    """
    Raised when an integer does not fit the requested bit width.

    For timestamps this means a time before the KSUID epoch or more than
    2**32 - 1 seconds after it.
    """

    def __init__(self, message: str, value: int, bits: int) -> None:
        super().__init__(message, field="timestamp", value=value)
        self.context["bits"] = bits
        self.bits = bits


class ConfigurationError(KsuidError):
    """
    Raised when the random payload generator is misconfigured.

    Validation happens when the generator is assigned, so a bad generator
    is caught at startup rather than on first use.
    """

    def __init__(
        self, message: str, generated: int | None = None, expected: int | None = None
    ) -> None:
        context = {}
        if generated is not None:
            context["generated"] = generated
        if expected is not None:
            context["expected"] = expected
        super().__init__(message, context=context)
        self.generated = generated
        self.expected = expected
