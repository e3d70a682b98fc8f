"""
test_ksuid.py - Tests for the KSUID value type.

Fixture values are shared with the reference Go implementation.
"""

import time
from datetime import datetime, timezone

import pytest

import ksuid
from ksuid.errors import (
    Base62Error,
    ConversionError,
    MalformedBufferError,
    TimestampRangeError,
    ValidationError,
)
from ksuid.ksuid import InputKind, Ksuid, classify_input, timestamp_offset
from ksuid.prefixed import PrefixedKsuid

MAX_TEXT = "aWgEPTl1tmebfsQzFP4bxwgy80V"
MIN_TEXT = "0" * 27
EXAMPLE_TEXT = "0vdbMgWkU6slGpLVCqEFwkkZvuW"
EXAMPLE_BYTES = [6, 131, 247, 137, 4, 156, 194, 21, 192, 153,
                 212, 43, 120, 77, 190, 153, 52, 27, 215, 156]


class TestCompatibility:
    """Known values from other KSUID implementations."""

    def test_maximum(self):
        value = Ksuid.from_base62(MAX_TEXT)

        assert value == Ksuid.max()
        assert value.to_text() == MAX_TEXT
        assert value.to_int() == 4_294_967_295
        assert value.to_time() == datetime(2150, 6, 19, 23, 21, 35, tzinfo=timezone.utc)
        assert value.payload_hex() == "F" * 32
        assert value.raw_hex() == "F" * 40

    def test_minimum(self):
        value = Ksuid.from_bytes(bytes(20))

        assert value == Ksuid.min()
        assert value.to_text() == MIN_TEXT
        assert value.to_int() == 0
        assert value.to_time() == datetime(2014, 5, 13, 16, 53, 20, tzinfo=timezone.utc)
        assert value.payload_hex() == "0" * 32
        assert value.raw_hex() == "0" * 40

    def test_example_value(self):
        value = Ksuid.from_bytes(EXAMPLE_BYTES)

        assert value.to_text() == EXAMPLE_TEXT
        assert value.raw_hex() == "0683F789049CC215C099D42B784DBE99341BD79C"
        assert value.to_int() == 109_311_881
        assert value.to_time() == datetime(2017, 10, 29, 21, 18, 1, tzinfo=timezone.utc)
        assert value.payload_hex() == "049CC215C099D42B784DBE99341BD79C"

    def test_another_example_value(self):
        value = Ksuid.from_base62("0vdbMkSk7XwvMeKS6aZMM2AVZ4G")

        assert value.to_int() == 109_311_881
        assert value.payload_hex() == "85EAB6C3F1809D7D4A00760CCBF7707C"
        assert value.raw_hex() == "0683F78985EAB6C3F1809D7D4A00760CCBF7707C"


class TestGenerate:
    """Tests for generating new KSUIDs."""

    def test_uses_the_current_time(self):
        before = int(time.time())
        value = Ksuid.generate()
        after = int(time.time())

        assert before <= value.to_time().timestamp() <= after

    def test_uses_a_given_datetime(self, fixed_time, zero_payload):
        value = Ksuid.generate(payload=zero_payload, time=fixed_time)

        assert value.to_time() == fixed_time
        assert value.payload == zero_payload

    def test_accepts_unix_seconds_and_floors_fractions(self, zero_payload):
        value = Ksuid.generate(payload=zero_payload, time=1_509_311_881.9)

        assert value.to_int() == 109_311_881

    def test_accepts_payload_arrays(self):
        value = Ksuid.generate(payload=EXAMPLE_BYTES[4:], time=1_509_311_881)

        assert value.to_text() == EXAMPLE_TEXT

    def test_rejects_short_payloads(self):
        with pytest.raises(ValidationError, match="Payload must be 16 bytes"):
            Ksuid.generate(payload=b"\x00" * 15)

    def test_rejects_times_before_the_epoch(self):
        with pytest.raises(TimestampRangeError):
            Ksuid.generate(time=datetime(2014, 1, 1, tzinfo=timezone.utc))

    def test_rejects_times_past_the_range(self):
        with pytest.raises(TimestampRangeError):
            Ksuid.generate(time=1_400_000_000 + 2**32)

    def test_accepts_the_last_second_of_the_range(self, zero_payload):
        value = Ksuid.generate(payload=zero_payload, time=1_400_000_000 + 2**32 - 1)
        assert value.to_int() == 2**32 - 1

    def test_rejects_non_times(self):
        with pytest.raises(ConversionError):
            timestamp_offset("yesterday")

    def test_module_helpers(self, fixed_time):
        assert isinstance(ksuid.new(), Ksuid)
        assert len(ksuid.string(time=fixed_time)) == 27
        assert ksuid.prefixed("evt_").to_text().startswith("evt_")
        assert ksuid.max_ksuid().to_text() == ksuid.MAX_STRING_ENCODED
        assert ksuid.min_ksuid().to_text() == MIN_TEXT


class TestParsing:
    """Tests for from_bytes and from_base62."""

    def test_from_bytes_rejects_short_buffers(self):
        with pytest.raises(MalformedBufferError) as exc_info:
            Ksuid.from_bytes(b"\x00" * 19)
        assert exc_info.value.expected == 20
        assert exc_info.value.actual == 19

    def test_from_bytes_rejects_long_buffers(self):
        with pytest.raises(MalformedBufferError):
            Ksuid.from_bytes(b"\x00" * 21)

    def test_constructor_validates_length(self):
        with pytest.raises(MalformedBufferError):
            Ksuid(b"\x00")

    def test_from_bytes_accepts_bytearrays(self):
        assert Ksuid.from_bytes(bytearray(EXAMPLE_BYTES)).to_text() == EXAMPLE_TEXT

    def test_from_base62_pads_short_text(self):
        value = Ksuid.from_base62("1LY7VK")
        assert value.to_text() == "0000000000000000000001LY7VK"

    def test_from_base62_rejects_bad_characters(self):
        with pytest.raises(Base62Error):
            Ksuid.from_base62("0vdbMgWkU6slGpLVCqEFwkkZvu!")

    def test_from_base62_rejects_values_wider_than_160_bits(self):
        with pytest.raises(ValidationError, match="too large"):
            Ksuid.from_base62("zzzzzzzzzzzzzzzzzzzzzzzzzzz")

    def test_round_trips(self):
        value = Ksuid.generate()

        assert Ksuid.from_bytes(value.to_bytes()) == value
        assert Ksuid.from_base62(value.to_text()) == value
        assert Ksuid.from_base62(value.to_text()).to_text() == value.to_text()


class TestCoerce:
    """Tests for converting arbitrary input."""

    def test_returns_ksuids_unchanged(self):
        value = Ksuid.generate()
        assert Ksuid.coerce(value) is value

    def test_drops_prefixes(self):
        value = PrefixedKsuid.from_base62("evt_" + EXAMPLE_TEXT, prefix="evt_")
        assert Ksuid.coerce(value) == Ksuid.from_base62(EXAMPLE_TEXT)

    def test_converts_byte_arrays(self):
        assert Ksuid.coerce(EXAMPLE_BYTES).to_text() == EXAMPLE_TEXT

    def test_converts_binary_strings(self):
        assert Ksuid.coerce(bytes(EXAMPLE_BYTES)).to_text() == EXAMPLE_TEXT

    def test_converts_base62_strings(self):
        assert Ksuid.coerce(EXAMPLE_TEXT).to_bytes() == bytes(EXAMPLE_BYTES)

    def test_converts_ascii_byte_strings(self):
        assert Ksuid.coerce(EXAMPLE_TEXT.encode("ascii")).to_text() == EXAMPLE_TEXT

    def test_converts_binary_text(self):
        assert Ksuid.coerce(bytes(EXAMPLE_BYTES).decode("latin-1")).to_text() == EXAMPLE_TEXT

    def test_returns_none_for_none(self):
        assert Ksuid.coerce(None) is None
        assert ksuid.call(None) is None

    def test_rejects_unknown_types(self):
        with pytest.raises(ConversionError, match="Cannot convert int 1 to KSUID"):
            Ksuid.coerce(1)

    def test_rejects_malformed_binary(self):
        with pytest.raises(MalformedBufferError):
            Ksuid.coerce(b"\x00\xff\x01")

    def test_classifies_input(self):
        assert classify_input(Ksuid.max()) is InputKind.KSUID
        assert classify_input(PrefixedKsuid("evt_", Ksuid.max())) is InputKind.PREFIXED
        assert classify_input(b"\x00") is InputKind.BYTES
        assert classify_input([0, 1]) is InputKind.BYTES
        assert classify_input("abc") is InputKind.TEXT
        with pytest.raises(ConversionError):
            classify_input(["a"])


class TestOrdering:
    """Ordering is by time only; equality is by the full buffer."""

    def test_orders_by_time(self, zero_payload):
        earlier = Ksuid.generate(payload=zero_payload, time=1_500_000_000)
        later = Ksuid.generate(payload=zero_payload, time=1_500_000_001)

        assert earlier < later
        assert later > earlier
        assert earlier.compare(later) == -1
        assert sorted([later, earlier]) == [earlier, later]

    def test_same_second_compares_equal_but_is_not_equal(self):
        first = Ksuid.generate(payload=b"\x01" * 16, time=1_500_000_000)
        second = Ksuid.generate(payload=b"\x02" * 16, time=1_500_000_000)

        assert first.compare(second) == 0
        assert first <= second and first >= second
        assert not first < second and not second < first
        assert first != second

    def test_payload_does_not_affect_order(self):
        early_big = Ksuid.generate(payload=b"\xff" * 16, time=1_500_000_000)
        late_small = Ksuid.generate(payload=b"\x00" * 16, time=1_500_000_001)

        assert early_big < late_small

    def test_sort_is_stable_within_a_second(self):
        values = [
            Ksuid.generate(payload=bytes([i]) * 16, time=1_500_000_000) for i in range(5)
        ]
        assert sorted(values) == values

    def test_compare_with_other_types_is_undefined(self):
        value = Ksuid.generate()

        assert value.compare(value.to_text()) is None
        with pytest.raises(TypeError):
            value < value.to_text()


class TestEqualityAndHashing:
    def test_equal_buffers_are_equal(self):
        first = Ksuid.from_base62(EXAMPLE_TEXT)
        second = Ksuid.from_bytes(EXAMPLE_BYTES)

        assert first == second
        assert hash(first) == hash(second)

    def test_usable_as_dictionary_keys(self):
        first = Ksuid.generate()
        second = Ksuid.from_base62(first.to_text())
        lookup = {first: "example"}

        assert lookup[second] == "example"

    def test_not_equal_to_strings(self):
        value = Ksuid.from_base62(EXAMPLE_TEXT)
        assert value != EXAMPLE_TEXT

    def test_immutable(self):
        value = Ksuid.generate()
        with pytest.raises(AttributeError):
            value.buffer = bytes(20)


class TestRepresentations:
    def test_str_and_bytes(self):
        value = Ksuid.from_base62(EXAMPLE_TEXT)

        assert str(value) == EXAMPLE_TEXT
        assert bytes(value) == bytes(EXAMPLE_BYTES)

    def test_repr(self):
        assert repr(Ksuid.max()) == f"<KSUID({MAX_TEXT})>"

    def test_text_is_always_27_characters(self):
        for _ in range(50):
            assert len(Ksuid.generate().to_text()) == 27

    def test_timestamp_and_payload_properties(self):
        value = Ksuid.from_bytes(EXAMPLE_BYTES)

        assert value.timestamp == 109_311_881
        assert value.payload == bytes(EXAMPLE_BYTES[4:])
