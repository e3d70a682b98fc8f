"""
adapters.py - Storage type adapters.

Persistence layers need three operations from a column type:

- cast: turn user input into a KSUID
- serialize: turn a KSUID into the stored form
- deserialize: turn the stored form back into a KSUID

KsuidType stores text, BinaryKsuidType stores the 20-byte buffer and
PrefixedKsuidType stores prefixed text. None passes through unchanged.

register_sqlite_adapters() wires the text forms into the sqlite3 module.
"""

import sqlite3
from typing import Any

from ksuid.config import STRING_LENGTH, TOTAL_BYTES
from ksuid.ksuid import Ksuid
from ksuid.prefixed import PrefixedKsuid

SQLITE_DECLTYPE = "KSUID"


class KsuidType:
    """Stores KSUIDs as 27-character base 62 text."""

    def cast(self, value: Any) -> Ksuid | None:
        return Ksuid.coerce(value)

    def deserialize(self, value: str | bytes | None) -> Ksuid | None:
        if value is None:
            return None
        return Ksuid.coerce(value)

    def serialize(self, value: Any) -> str | None:
        if value is None:
            return None
        return Ksuid.coerce(value).to_text()

    def column_width(self) -> int:
        return STRING_LENGTH


class BinaryKsuidType(KsuidType):
    """Stores KSUIDs as their 20-byte binary form."""

    def deserialize(self, value: bytes | None) -> Ksuid | None:
        if value is None:
            return None
        return Ksuid.from_bytes(value)

    def serialize(self, value: Any) -> bytes | None:
        if value is None:
            return None
        return Ksuid.coerce(value).to_bytes()

    def column_width(self) -> int:
        return TOTAL_BYTES


class PrefixedKsuidType:
    """
    Stores prefixed KSUIDs as text.

    The prefix is fixed per column, so the stored width is the prefix
    length plus 27.
    """

    def __init__(self, prefix: str, strict: bool = False) -> None:
        self.prefix = prefix
        self.strict = strict

    def cast(self, value: Any) -> PrefixedKsuid | None:
        return PrefixedKsuid.coerce(value, prefix=self.prefix, strict=self.strict)

    def deserialize(self, value: str | None) -> PrefixedKsuid | None:
        if value is None:
            return None
        return PrefixedKsuid.from_base62(value, prefix=self.prefix, strict=self.strict)

    def serialize(self, value: Any) -> str | None:
        if value is None:
            return None
        return self.cast(value).to_text()

    def column_width(self) -> int:
        return len(self.prefix) + STRING_LENGTH


def register_sqlite_adapters(binary: bool = False) -> None:
    """
    Register sqlite3 adapters and a converter for KSUIDs.

    Ksuid values are stored as text, or as blobs when binary is set.
    PrefixedKsuid values are always stored as text. Columns declared with
    type KSUID are converted back to Ksuid when the connection is opened
    with detect_types=sqlite3.PARSE_DECLTYPES.
    """
    column = BinaryKsuidType() if binary else KsuidType()

    sqlite3.register_adapter(Ksuid, column.serialize)
    sqlite3.register_adapter(PrefixedKsuid, PrefixedKsuid.to_text)
    sqlite3.register_converter(SQLITE_DECLTYPE, column.deserialize)
