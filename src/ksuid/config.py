"""
config.py - Constants describing the KSUID layout.

All configuration here is immutable and defined at module level.
The mutable random generator lives in ksuid.configuration.
"""

from typing import Final

# Custom epoch: 2014-05-13T16:53:20Z, in Unix seconds
EPOCH_TIME: Final[int] = 1_400_000_000

# Binary layout: [timestamp offset][payload], big-endian
TIMESTAMP_BYTES: Final[int] = 4
PAYLOAD_BYTES: Final[int] = 16
TOTAL_BYTES: Final[int] = TIMESTAMP_BYTES + PAYLOAD_BYTES

TIMESTAMP_BITS: Final[int] = TIMESTAMP_BYTES * 8
TOTAL_BITS: Final[int] = TOTAL_BYTES * 8

# Largest offset that fits in the timestamp segment (about 136 years)
MAX_TIMESTAMP_OFFSET: Final[int] = 2**TIMESTAMP_BITS - 1

# Text forms
STRING_LENGTH: Final[int] = 27
RAW_LENGTH: Final[int] = TOTAL_BYTES * 2
MAX_STRING_ENCODED: Final[str] = "aWgEPTl1tmebfsQzFP4bxwgy80V"

# MessagePack extension type codes
MSGPACK_EXT_KSUID: Final[int] = 75  # "K"
MSGPACK_EXT_PREFIXED: Final[int] = 80  # "P"
