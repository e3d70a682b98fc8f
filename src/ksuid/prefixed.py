"""
prefixed.py - KSUIDs labelled with an application prefix.

When an application has several kinds of KSUID, a short prefix such as
"evt_" or "cus_" tells them apart at a glance. The prefix only affects the
text form, ordering and equality. There is no binary form, because a
prefix cannot be stored in the 20-byte layout.

Prefixed KSUIDs order first by prefix and then by timestamp, so a mixed
collection groups all "cus_" identifiers before all "evt_" identifiers.
They are not comparable with plain KSUIDs.

Two lenient parsing behaviours are kept by default:

- from_base62() strips the prefix only when the text starts with it and
  otherwise decodes the text as it is.
- coerce() keeps the last 27 characters of long text, so text carrying a
  different prefix is silently re-labelled.

Pass strict=True to turn either case into a ValidationError.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ksuid import base62
from ksuid.config import STRING_LENGTH, TOTAL_BITS
from ksuid.configuration import Configuration, RandomSource
from ksuid.errors import ConversionError, TimestampRangeError, ValidationError
from ksuid.ksuid import BytesInput, InputKind, Ksuid, TimeLike, classify_input
from ksuid.utils.conversions import int_to_bytes

logger = logging.getLogger(__name__)


def _check_prefix(prefix: Any) -> str:
    if not isinstance(prefix, str) or not prefix:
        raise ValidationError("Prefixed KSUIDs require a prefix", field="prefix", value=prefix)
    return prefix


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class PrefixedKsuid:
    """
    A Ksuid with a string prefix in front of its text form.

    The prefix is fixed at construction and must be a non-empty string.
    """
    prefix: str
    ksuid: Ksuid

    def __post_init__(self) -> None:
        _check_prefix(self.prefix)
        if not isinstance(self.ksuid, Ksuid):
            raise ConversionError(
                f"Cannot wrap {type(self.ksuid).__name__} {self.ksuid!r} in a prefixed KSUID",
                value=self.ksuid,
            )

    @classmethod
    def generate(
        cls,
        prefix: str,
        payload: BytesInput | None = None,
        time: TimeLike | None = None,
        config: Configuration | RandomSource | None = None,
    ) -> "PrefixedKsuid":
        """
        Generate a prefixed KSUID for a point in time.

        Args:
            prefix: Non-empty label, e.g. "evt_"
            payload: 16 payload bytes; drawn from config when omitted
            time: When the KSUID was created; defaults to now
            config: Random source overriding the process-wide configuration

        Raises:
            ValidationError: If prefix is empty or payload is not 16 bytes
        """
        _check_prefix(prefix)
        return cls(prefix, Ksuid.generate(payload=payload, time=time, config=config))

    @classmethod
    def from_base62(cls, text: str, prefix: str, strict: bool = False) -> "PrefixedKsuid":
        """
        Parse prefixed text such as "evt_0vdbMgWkU6slGpLVCqEFwkkZvuW".

        A leading occurrence of prefix is removed before decoding. Text
        without the prefix is decoded unchanged unless strict is set.

        Raises:
            ValidationError: If strict and text does not start with prefix
            Base62Error: If the body is not base 62
        """
        _check_prefix(prefix)
        if not isinstance(text, str):
            raise ConversionError(
                f"Cannot parse {type(text).__name__} {text!r} as a prefixed KSUID",
                value=text,
            )

        if text.startswith(prefix):
            body = text[len(prefix):]
        elif strict:
            raise ValidationError(
                f"{text} does not start with prefix {prefix!r}",
                field="prefix",
                value=text,
            )
        else:
            logger.debug("Text %r has no prefix %r, decoding as is", text, prefix)
            body = text

        number = base62.decode(body)
        try:
            buffer = int_to_bytes(number, TOTAL_BITS)
        except TimestampRangeError as e:
            raise ValidationError(
                f"{text} is too large for a KSUID", field="base62", value=text
            ) from e

        return cls(prefix, Ksuid.from_bytes(buffer))

    @classmethod
    def coerce(cls, value: Any, prefix: str, strict: bool = False) -> "PrefixedKsuid | None":
        """
        Convert a KSUID-compatible value into a PrefixedKsuid.

        - PrefixedKsuid or Ksuid: re-labelled with prefix
        - str: the last 27 characters are decoded as base 62
        - bytes: rejected, prefixed KSUIDs have no binary form
        - None: returns None

        With strict set, text longer than 27 characters must carry
        exactly this prefix.

        Raises:
            ConversionError: If value is binary or of an unsupported type
            ValidationError: If strict and the text has another prefix
        """
        if value is None:
            return None
        _check_prefix(prefix)

        kind = classify_input(value)
        if kind is InputKind.PREFIXED:
            return cls(prefix, value.to_ksuid())
        if kind is InputKind.KSUID:
            return cls(prefix, Ksuid.from_base62(value.to_text()))
        if kind is InputKind.BYTES:
            raise ConversionError("Prefixed KSUIDs cannot be binary strings", value=value)
        return cls._cast_string(value, prefix, strict)

    @classmethod
    def _cast_string(cls, text: str, prefix: str, strict: bool) -> "PrefixedKsuid":
        if strict and len(text) > STRING_LENGTH and text[:-STRING_LENGTH] != prefix:
            raise ValidationError(
                f"{text} does not carry prefix {prefix!r}",
                field="prefix",
                value=text,
            )

        body = text[-STRING_LENGTH:] if len(text) >= STRING_LENGTH else text
        if not base62.compatible(body):
            raise ConversionError("Prefixed KSUIDs cannot be binary strings", value=text)

        return cls(prefix, Ksuid.from_base62(body))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def timestamp(self) -> int:
        return self.ksuid.timestamp

    @property
    def payload(self) -> bytes:
        return self.ksuid.payload

    def to_text(self) -> str:
        """The prefix followed by the 27-character base 62 form."""
        return self.prefix + self.ksuid.to_text()

    def to_int(self) -> int:
        return self.ksuid.to_int()

    def to_time(self) -> datetime:
        return self.ksuid.to_time()

    def payload_hex(self) -> str:
        return self.ksuid.payload_hex()

    def raw_hex(self) -> str:
        """The prefix followed by the upper-case hex of the buffer."""
        return self.prefix + self.ksuid.raw_hex()

    def to_ksuid(self) -> Ksuid:
        """Drop the prefix, returning a plain Ksuid."""
        return Ksuid.from_base62(self.to_text()[len(self.prefix):])

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"<KSUID({self.to_text()})>"

    # -------------------------------------------------------------------------
    # Ordering and equality
    # -------------------------------------------------------------------------

    def compare(self, other: Any) -> int | None:
        """
        Three-way comparison by prefix, then timestamp.

        Returns:
            -1, 0 or 1, or None when other is not a PrefixedKsuid
        """
        if not isinstance(other, PrefixedKsuid):
            return None
        if self.prefix != other.prefix:
            return -1 if self.prefix < other.prefix else 1
        return self.ksuid.compare(other.ksuid)

    def __lt__(self, other: Any) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: Any) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: Any) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: Any) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result >= 0

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, PrefixedKsuid):
            return self.prefix == other.prefix and self.ksuid.buffer == other.ksuid.buffer
        if isinstance(other, Ksuid):
            return False
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.prefix, self.ksuid.buffer))
