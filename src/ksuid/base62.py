"""
base62.py - Fixed-width base 62 encoding.

KSUIDs are stored and reported as base 62 numbers so they are compact and
sort lexicographically. The alphabet is the digits, then the upper-case
letters, then the lower-case letters. That is ASCII order, so for encodings
of equal width string order agrees with numeric order.
"""

from typing import Any, Final, Iterable

from ksuid.config import STRING_LENGTH
from ksuid.errors import Base62Error
from ksuid.utils.conversions import int_from_bytes

CHARSET: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE: Final[int] = len(CHARSET)
PADDING: Final[str] = CHARSET[0]

_CHAR_TO_DIGIT: Final[dict[str, int]] = {char: i for i, char in enumerate(CHARSET)}
_CHARSET_BYTES: Final[frozenset[int]] = frozenset(CHARSET.encode("ascii"))


def compatible(value: Any) -> bool:
    """
    Check whether every character of value is in the base 62 alphabet.

    Byte strings are checked byte by byte, so binary identifiers that
    contain out-of-alphabet bytes are reported as incompatible. Anything
    that is neither text nor bytes is incompatible.

    Args:
        value: Candidate text

    Returns:
        True if value could be decoded as base 62
    """
    if isinstance(value, str):
        return all(char in _CHAR_TO_DIGIT for char in value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return all(byte in _CHARSET_BYTES for byte in bytes(value))
    return False


def decode(text: str) -> int:
    """
    Decode base 62 text of any length into an integer.

    Args:
        text: Base 62 digits, most significant first

    Returns:
        The decoded non-negative integer

    Raises:
        Base62Error: If text contains a character outside the alphabet
    """
    result = 0
    for char in text:
        try:
            digit = _CHAR_TO_DIGIT[char]
        except (KeyError, TypeError) as e:
            raise Base62Error(text) from e
        result = result * BASE + digit
    return result


def encode(number: int) -> str:
    """
    Encode an integer as base 62, left-padded to 27 characters.

    Negative numbers encode as all padding. Numbers wider than 27 digits
    are returned unpadded rather than truncated.

    Args:
        number: Integer to encode

    Returns:
        The base 62 text
    """
    chars = []
    while number > 0:
        number, remainder = divmod(number, BASE)
        chars.append(CHARSET[remainder])

    return "".join(reversed(chars)).rjust(STRING_LENGTH, PADDING)


def encode_bytes(data: bytes | bytearray | Iterable[int]) -> str:
    """Encode a big-endian byte string or byte array as base 62."""
    return encode(int_from_bytes(data))
