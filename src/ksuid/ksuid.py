"""
ksuid.py - The KSUID value type.

A KSUID is 20 bytes: a 4-byte big-endian count of seconds since the KSUID
epoch, followed by a 16-byte payload. Text form is the whole buffer as a
27-character base 62 number.

Ordering uses the timestamp only, while equality and hashing use the full
buffer. Two KSUIDs from the same second therefore sort as equal but are
not equal. Use a stable sort when the order within a second matters.
"""

import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from ksuid import base62
from ksuid.config import (
    EPOCH_TIME,
    MAX_TIMESTAMP_OFFSET,
    PAYLOAD_BYTES,
    STRING_LENGTH,
    TIMESTAMP_BITS,
    TIMESTAMP_BYTES,
    TOTAL_BITS,
    TOTAL_BYTES,
)
from ksuid.configuration import Configuration, RandomSource, payload_from
from ksuid.errors import (
    ConversionError,
    MalformedBufferError,
    TimestampRangeError,
    ValidationError,
)
from ksuid.utils.conversions import as_bytes, bytes_to_hex, int_from_bytes, int_to_bytes

if TYPE_CHECKING:
    from ksuid.prefixed import PrefixedKsuid

TimeLike = datetime | int | float
BytesInput = bytes | bytearray | memoryview | Iterable[int]


class InputKind(Enum):
    """The kinds of value that can be converted into a KSUID."""
    KSUID = "ksuid"
    PREFIXED = "prefixed"
    BYTES = "bytes"
    TEXT = "text"


def classify_input(value: Any) -> InputKind:
    """
    Decide how a value should be converted into a KSUID.

    Args:
        value: A KSUID, prefixed KSUID, byte string, byte array or text

    Returns:
        The matching InputKind

    Raises:
        ConversionError: If value is none of the supported kinds
    """
    from ksuid.prefixed import PrefixedKsuid

    if isinstance(value, Ksuid):
        return InputKind.KSUID
    if isinstance(value, PrefixedKsuid):
        return InputKind.PREFIXED
    if isinstance(value, (bytes, bytearray, memoryview)):
        return InputKind.BYTES
    if isinstance(value, (list, tuple)) and all(
        isinstance(item, int) and not isinstance(item, bool) for item in value
    ):
        return InputKind.BYTES
    if isinstance(value, str):
        return InputKind.TEXT

    raise ConversionError(
        f"Cannot convert {type(value).__name__} {value!r} to KSUID", value=value
    )


def timestamp_offset(when: TimeLike | None = None) -> int:
    """
    Convert a point in time to seconds since the KSUID epoch.

    Args:
        when: A datetime (naive values are local time), Unix seconds, or
            None for now. Fractions of a second are floored.

    Returns:
        The offset, between 0 and 2**32 - 1

    Raises:
        ConversionError: If when is not a time
        TimestampRangeError: If when is before the epoch or too far after it
    """
    if when is None:
        seconds = time.time()
    elif isinstance(when, datetime):
        seconds = when.timestamp()
    elif isinstance(when, (int, float)) and not isinstance(when, bool):
        seconds = when
    else:
        raise ConversionError(
            f"Cannot use {type(when).__name__} {when!r} as a KSUID time", value=when
        )

    offset = math.floor(seconds) - EPOCH_TIME
    if not 0 <= offset <= MAX_TIMESTAMP_OFFSET:
        raise TimestampRangeError(
            f"Time {when!r} is outside the KSUID range "
            f"({EPOCH_TIME} to {EPOCH_TIME + MAX_TIMESTAMP_OFFSET} Unix seconds)",
            value=offset,
            bits=TIMESTAMP_BITS,
        )
    return offset


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Ksuid:
    """
    Immutable K-Sortable Unique IDentifier.

    Construct with Ksuid.generate() or one of the parsing class methods.
    The raw buffer is validated on creation and never changes.
    """
    buffer: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.buffer, bytes):
            object.__setattr__(self, "buffer", as_bytes(self.buffer))
        if len(self.buffer) != TOTAL_BYTES:
            raise MalformedBufferError(TOTAL_BYTES, len(self.buffer))

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def generate(
        cls,
        payload: BytesInput | None = None,
        time: TimeLike | None = None,
        config: Configuration | RandomSource | None = None,
    ) -> "Ksuid":
        """
        Generate a KSUID for a point in time.

        Args:
            payload: 16 payload bytes; drawn from config when omitted
            time: When the KSUID was created; defaults to now
            config: Random source overriding the process-wide configuration

        Returns:
            The new KSUID

        Raises:
            ValidationError: If payload is not 16 bytes
            TimestampRangeError: If time is outside the KSUID range
        """
        offset = timestamp_offset(time)

        if payload is None:
            payload = payload_from(config)
        else:
            payload = as_bytes(payload)
            if len(payload) != PAYLOAD_BYTES:
                raise ValidationError(
                    f"Payload must be {PAYLOAD_BYTES} bytes, got {len(payload)}",
                    field="payload",
                    value=payload,
                )

        return cls(int_to_bytes(offset, TIMESTAMP_BITS) + payload)

    @classmethod
    def from_bytes(cls, data: BytesInput) -> "Ksuid":
        """
        Build a KSUID from its 20-byte binary form.

        Args:
            data: Byte string or array of byte values

        Raises:
            MalformedBufferError: If data is not exactly 20 bytes
        """
        return cls(as_bytes(data))

    @classmethod
    def from_base62(cls, text: str) -> "Ksuid":
        """
        Parse the 27-character text form.

        Shorter text is left-padded with zeros, so "1LY7VK" is accepted.

        Raises:
            Base62Error: If text has characters outside the alphabet
            ValidationError: If text encodes a number wider than 160 bits
        """
        if not isinstance(text, str):
            raise ConversionError(
                f"Cannot parse {type(text).__name__} {text!r} as base 62", value=text
            )
        if len(text) < STRING_LENGTH:
            text = text.rjust(STRING_LENGTH, base62.PADDING)

        return cls.from_bytes(_int_to_buffer(base62.decode(text), text))

    @classmethod
    def coerce(cls, value: Any) -> "Ksuid | None":
        """
        Convert any KSUID-compatible value into a Ksuid.

        - Ksuid: returned unchanged
        - PrefixedKsuid: the prefix is dropped
        - list/tuple of ints: treated as a byte array
        - bytes: 20 bytes are binary, other lengths are tried as base 62
        - str: base 62 if compatible, otherwise treated as binary
        - None: returns None

        Raises:
            ConversionError: If value is of an unsupported type
            MalformedBufferError: If binary input is not 20 bytes
        """
        if value is None:
            return None

        kind = classify_input(value)
        if kind is InputKind.KSUID:
            return value
        if kind is InputKind.PREFIXED:
            return value.to_ksuid()
        if kind is InputKind.BYTES:
            return cls._cast_bytes(value)
        return cls._cast_string(value)

    @classmethod
    def max(cls) -> "Ksuid":
        """The largest possible KSUID."""
        return cls(b"\xff" * TOTAL_BYTES)

    @classmethod
    def min(cls) -> "Ksuid":
        """The smallest possible KSUID."""
        return cls(bytes(TOTAL_BYTES))

    @classmethod
    def _cast_bytes(cls, data: BytesInput) -> "Ksuid":
        if isinstance(data, (list, tuple)) or len(data) == TOTAL_BYTES:
            return cls.from_bytes(data)
        if base62.compatible(data):
            return cls.from_base62(bytes(data).decode("ascii"))
        return cls.from_bytes(data)

    @classmethod
    def _cast_string(cls, text: str) -> "Ksuid":
        if base62.compatible(text):
            return cls.from_base62(text)

        try:
            data = text.encode("latin-1")
        except UnicodeEncodeError as e:
            raise ConversionError(
                f"Cannot convert str {text!r} to KSUID", value=text
            ) from e
        return cls.from_bytes(data)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def timestamp(self) -> int:
        """Seconds since the KSUID epoch."""
        return int_from_bytes(self.buffer[:TIMESTAMP_BYTES])

    @property
    def payload(self) -> bytes:
        """The 16 payload bytes."""
        return self.buffer[TIMESTAMP_BYTES:]

    def to_text(self) -> str:
        """The 27-character base 62 form."""
        return base62.encode_bytes(self.buffer)

    def to_bytes(self) -> bytes:
        """The 20-byte binary form."""
        return self.buffer

    def to_int(self) -> int:
        """
        The timestamp segment as an integer.

        This is the offset from the KSUID epoch, not a Unix timestamp.
        """
        return self.timestamp

    def to_time(self) -> datetime:
        """When the KSUID was generated, in UTC, to the second."""
        return datetime.fromtimestamp(EPOCH_TIME + self.timestamp, tz=timezone.utc)

    def payload_hex(self) -> str:
        """The payload as upper-case hex, as printed by the Go tool."""
        return bytes_to_hex(self.payload)

    def raw_hex(self) -> str:
        """The whole buffer as upper-case hex."""
        return bytes_to_hex(self.buffer)

    def __str__(self) -> str:
        return self.to_text()

    def __bytes__(self) -> bytes:
        return self.buffer

    def __repr__(self) -> str:
        return f"<KSUID({self.to_text()})>"

    # -------------------------------------------------------------------------
    # Ordering and equality
    # -------------------------------------------------------------------------

    def compare(self, other: Any) -> int | None:
        """
        Three-way comparison by timestamp.

        Returns:
            -1, 0 or 1, or None when other is not a Ksuid
        """
        if not isinstance(other, Ksuid):
            return None
        return (self.timestamp > other.timestamp) - (self.timestamp < other.timestamp)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self.timestamp < other.timestamp

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self.timestamp <= other.timestamp

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self.timestamp > other.timestamp

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self.timestamp >= other.timestamp

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Ksuid):
            return NotImplemented
        return self.buffer == other.buffer

    def __hash__(self) -> int:
        return hash(self.buffer)


def _int_to_buffer(number: int, text: str) -> bytes:
    """Encode a decoded base 62 number as a 20-byte buffer."""
    try:
        return int_to_bytes(number, TOTAL_BITS)
    except TimestampRangeError as e:
        raise ValidationError(
            f"{text} is too large for a KSUID",
            field="base62",
            value=text,
        ) from e
