"""
ksuid - K-Sortable Unique IDentifiers

20-byte identifiers made of a second-precision timestamp and a random
payload, with a fixed-width base 62 text form that sorts by time.
"""

from typing import Any

from ksuid.config import EPOCH_TIME, MAX_STRING_ENCODED, STRING_LENGTH, TOTAL_BYTES
from ksuid.configuration import (
    Configuration,
    RandomSource,
    configure,
    get_config,
    reset_config,
)
from ksuid.errors import (
    Base62Error,
    ConfigurationError,
    ConversionError,
    KsuidError,
    MalformedBufferError,
    TimestampRangeError,
    ValidationError,
)
from ksuid.ksuid import InputKind, Ksuid, TimeLike
from ksuid.prefixed import PrefixedKsuid

__version__ = "0.1.0"
__all__ = [
    # Values
    "Ksuid",
    "PrefixedKsuid",
    "InputKind",
    # Builders
    "new",
    "prefixed",
    "string",
    "coerce",
    "call",
    "from_base62",
    "from_bytes",
    "max_ksuid",
    "min_ksuid",
    # Configuration
    "Configuration",
    "RandomSource",
    "configure",
    "get_config",
    "reset_config",
    # Constants
    "EPOCH_TIME",
    "MAX_STRING_ENCODED",
    "STRING_LENGTH",
    "TOTAL_BYTES",
    # Errors
    "KsuidError",
    "ValidationError",
    "Base62Error",
    "ConversionError",
    "MalformedBufferError",
    "TimestampRangeError",
    "ConfigurationError",
]


def new(
    payload: Any = None,
    time: TimeLike | None = None,
    config: Configuration | RandomSource | None = None,
) -> Ksuid:
    """Generate a KSUID; see Ksuid.generate."""
    return Ksuid.generate(payload=payload, time=time, config=config)


def prefixed(
    prefix: str,
    payload: Any = None,
    time: TimeLike | None = None,
    config: Configuration | RandomSource | None = None,
) -> PrefixedKsuid:
    """Generate a prefixed KSUID; see PrefixedKsuid.generate."""
    return PrefixedKsuid.generate(prefix, payload=payload, time=time, config=config)


def string(
    payload: Any = None,
    time: TimeLike | None = None,
    config: Configuration | RandomSource | None = None,
) -> str:
    """Generate a KSUID and return its text form."""
    return new(payload=payload, time=time, config=config).to_text()


def coerce(value: Any) -> Ksuid | None:
    """Convert any KSUID-compatible value; see Ksuid.coerce."""
    return Ksuid.coerce(value)


call = coerce


def from_base62(text: str) -> Ksuid:
    return Ksuid.from_base62(text)


def from_bytes(data: Any) -> Ksuid:
    return Ksuid.from_bytes(data)


def max_ksuid() -> Ksuid:
    return Ksuid.max()


def min_ksuid() -> Ksuid:
    return Ksuid.min()
