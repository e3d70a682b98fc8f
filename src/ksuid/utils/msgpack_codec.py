"""
msgpack_codec.py - MessagePack serialization of KSUIDs.

KSUIDs are packed as MessagePack extension types so they survive a round
trip inside arbitrary structures:

- Ksuid: ext type 75 carrying the 20-byte buffer
- PrefixedKsuid: ext type 80 carrying the UTF-8 prefixed text, since a
  prefix has no binary form

Everything else is packed as plain MessagePack.
"""

import msgpack
from typing import Any

from ksuid.config import MSGPACK_EXT_KSUID, MSGPACK_EXT_PREFIXED, STRING_LENGTH
from ksuid.errors import KsuidError, ValidationError
from ksuid.ksuid import Ksuid
from ksuid.prefixed import PrefixedKsuid


def _default(value: Any) -> msgpack.ExtType:
    if isinstance(value, Ksuid):
        return msgpack.ExtType(MSGPACK_EXT_KSUID, value.to_bytes())
    if isinstance(value, PrefixedKsuid):
        return msgpack.ExtType(MSGPACK_EXT_PREFIXED, value.to_text().encode("utf-8"))
    raise TypeError(f"Cannot serialize {type(value).__name__} to MessagePack")


def _ext_hook(code: int, data: bytes) -> Any:
    if code == MSGPACK_EXT_KSUID:
        return Ksuid.from_bytes(data)
    if code == MSGPACK_EXT_PREFIXED:
        text = data.decode("utf-8")
        if len(text) <= STRING_LENGTH:
            raise ValueError(f"Prefixed KSUID {text!r} has no prefix")
        return PrefixedKsuid.from_base62(text, prefix=text[:-STRING_LENGTH])
    return msgpack.ExtType(code, data)


def pack_value(value: Any) -> bytes:
    """
    Serialize a value, which may contain KSUIDs, to MessagePack.

    Args:
        value: Value to serialize (msgpack-compatible apart from KSUIDs)

    Returns:
        MessagePack bytes

    Raises:
        ValidationError: If value cannot be serialized
    """
    try:
        return msgpack.packb(value, default=_default, use_bin_type=True)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"Cannot serialize value to MessagePack: {e}",
            field="value",
            value=value,
        ) from e


def unpack_value(data: bytes) -> Any:
    """
    Deserialize MessagePack, restoring KSUID extension types.

    Args:
        data: MessagePack bytes

    Returns:
        Deserialized value

    Raises:
        ValidationError: If data cannot be deserialized
    """
    try:
        return msgpack.unpackb(data, ext_hook=_ext_hook, raw=False)
    except KsuidError as e:
        raise ValidationError(
            f"Cannot deserialize KSUID from MessagePack: {e}",
            field="data",
            value=data[:50] if len(data) > 50 else data,
        ) from e
    except (msgpack.UnpackException, ValueError) as e:
        raise ValidationError(
            f"Cannot deserialize MessagePack: {e}",
            field="data",
            value=data[:50] if len(data) > 50 else data,
        ) from e


def pack_ksuids(ksuids: list[Ksuid | PrefixedKsuid]) -> bytes:
    """Serialize a list of KSUIDs, keeping their order."""
    return pack_value(list(ksuids))


def unpack_ksuids(data: bytes) -> list[Ksuid | PrefixedKsuid]:
    """
    Deserialize a list of KSUIDs.

    Raises:
        ValidationError: If data is not a list of KSUIDs
    """
    result = unpack_value(data)
    if not isinstance(result, list) or not all(
        isinstance(item, (Ksuid, PrefixedKsuid)) for item in result
    ):
        raise ValidationError(
            f"Expected a list of KSUIDs, got {type(result).__name__}",
            field="data",
            value=result,
        )
    return result
