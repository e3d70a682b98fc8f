"""
conversions.py - Byte, integer and hex conversions.

Identifiers round-trip through 160-bit integers during base 62 coding,
so every conversion here works with arbitrary-precision Python ints.
All byte orders are big-endian.
"""

from typing import Iterable

from ksuid.errors import TimestampRangeError, ValidationError

BytesLike = bytes | bytearray | memoryview


def byte_string_from_array(values: Iterable[int]) -> bytes:
    """
    Pack an array of byte values into a byte string.

    Args:
        values: Integers in the range 0-255

    Returns:
        The packed bytes

    Raises:
        ValidationError: If any value is not a byte
    """
    try:
        return bytes(values)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Cannot pack byte array: {e}",
            field="bytes",
            value=values,
        ) from e


def as_bytes(data: BytesLike | Iterable[int]) -> bytes:
    """Normalize a byte string or an array of byte values to bytes."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    return byte_string_from_array(data)


def int_from_bytes(data: BytesLike | Iterable[int]) -> int:
    """
    Interpret bytes as an unsigned big-endian integer.

    Accepts any length; an empty input decodes to 0.

    Args:
        data: Byte string or array of byte values

    Returns:
        The decoded non-negative integer
    """
    return int.from_bytes(as_bytes(data), byteorder="big")


def int_to_bytes(value: int, bits: int = 32) -> bytes:
    """
    Encode a non-negative integer as bits / 8 big-endian bytes.

    Args:
        value: Integer to encode
        bits: Width of the output in bits, a multiple of 8

    Returns:
        The encoded bytes, left-padded with zeros

    Raises:
        ValidationError: If bits is not a positive multiple of 8
        TimestampRangeError: If value is negative or needs more than bits
    """
    if bits <= 0 or bits % 8:
        raise ValidationError(
            f"Bit width must be a positive multiple of 8, got {bits}",
            field="bits",
            value=bits,
        )
    if value < 0:
        raise TimestampRangeError(
            f"Cannot encode negative integer {value}", value=value, bits=bits
        )
    if value.bit_length() > bits:
        raise TimestampRangeError(
            f"Integer {value} does not fit in {bits} bits", value=value, bits=bits
        )
    return value.to_bytes(bits // 8, byteorder="big")


def bytes_to_hex(data: BytesLike | Iterable[int]) -> str:
    """
    Encode bytes as upper-case hexadecimal text.

    Args:
        data: Byte string or array of byte values

    Returns:
        Hex string with two characters per byte
    """
    return as_bytes(data).hex().upper()


def hex_to_bytes(text: str, bits: int | None = None) -> bytes:
    """
    Decode hexadecimal text (either case) into bytes.

    Args:
        text: Hex string
        bits: Optional output width; shorter input is left-padded with zeros

    Returns:
        The decoded bytes

    Raises:
        ValidationError: If text is not valid hex
        TimestampRangeError: If the decoded value does not fit in bits
    """
    try:
        data = bytes.fromhex(text)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Invalid hex string: {e}",
            field="hex",
            value=text,
        ) from e

    if bits is None:
        return data
    return int_to_bytes(int_from_bytes(data), bits)
