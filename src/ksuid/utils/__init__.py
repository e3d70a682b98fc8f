"""
utils - Byte conversions and serialization helpers.
"""

from ksuid.utils.conversions import (
    byte_string_from_array,
    bytes_to_hex,
    hex_to_bytes,
    int_from_bytes,
    int_to_bytes,
)

__all__ = [
    "byte_string_from_array",
    "bytes_to_hex",
    "hex_to_bytes",
    "int_from_bytes",
    "int_to_bytes",
]
