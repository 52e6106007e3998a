"""Tests for the IOP binary codec."""

import logging
import struct

import pytest

from tests.pool_test_helpers import make_object, make_pool
from vtpool.codec import decode_pool, decode_pool_strict, encode_object, encode_pool
from vtpool.errors import IopDecodeError
from vtpool.pool import ObjectPool, ObjectRef, ObjectType


class TestEncodeObject:
    """Tests for single-record encoding."""

    def test_number_variable_layout(self):
        obj = make_object(ObjectType.NUMBER_VARIABLE, 21000, value=0x01020304)
        assert encode_object(obj) == struct.pack("<HBI", 21000, 21, 0x01020304)

    def test_container_layout(self):
        obj = make_object(
            ObjectType.CONTAINER,
            3000,
            width=100,
            height=50,
            hidden=True,
            object_refs=[ObjectRef(6000, -2, 7)],
        )
        expected = (
            struct.pack("<HB", 3000, 3)
            + struct.pack("<HHB", 100, 50, 1)
            + struct.pack("<BB", 1, 0)
            + struct.pack("<Hhh", 6000, -2, 7)
        )
        assert encode_object(obj) == expected

    def test_null_reference_written_as_ffff(self):
        obj = make_object(ObjectType.DATA_MASK, 1000, soft_key_mask=None)
        assert encode_object(obj)[4:6] == b"\xff\xff"

    def test_string_length_prefix(self):
        obj = make_object(ObjectType.STRING_VARIABLE, 22000, value="Hi")
        assert encode_object(obj) == struct.pack("<HBH", 22000, 22, 2) + b"Hi"

    def test_unencodable_value_raises_value_error(self):
        obj = make_object(ObjectType.BUTTON, 6000, width=70000)
        with pytest.raises(ValueError, match="cannot encode 'width'"):
            encode_object(obj)

    def test_non_latin1_string_rejected(self):
        obj = make_object(ObjectType.STRING_VARIABLE, 22000, value="日本")
        with pytest.raises(ValueError):
            encode_object(obj)


class TestRoundTrip:
    """Tests that decoding reverses encoding."""

    def test_every_type_round_trips(self, full_pool):
        decoded = decode_pool_strict(encode_pool(full_pool))
        assert decoded == full_pool

    def test_pool_order_preserved(self):
        pool = make_pool(make_object(ObjectType.BUTTON, 6001), make_object(ObjectType.BUTTON, 6000))
        assert decode_pool_strict(encode_pool(pool)).ids() == [6001, 6000]

    def test_empty_pool(self):
        assert encode_pool(ObjectPool()) == b""
        assert len(decode_pool_strict(b"")) == 0


class TestDecodeErrors:
    """Tests for malformed input."""

    def test_truncated_record_strict(self, basic_pool):
        data = encode_pool(basic_pool)
        with pytest.raises(IopDecodeError, match="Truncated"):
            decode_pool_strict(data[:-1])

    def test_unknown_type_strict(self):
        with pytest.raises(IopDecodeError, match="Unknown object type 200") as exc_info:
            decode_pool_strict(struct.pack("<HB", 1, 200) + b"\x00" * 8)
        assert exc_info.value.offset == 0

    def test_duplicate_id_strict(self):
        record = encode_object(make_object(ObjectType.NUMBER_VARIABLE, 21000))
        with pytest.raises(IopDecodeError, match="Duplicate object id 21000") as exc_info:
            decode_pool_strict(record + record)
        assert exc_info.value.offset == len(record)

    def test_lenient_keeps_leading_objects(self, basic_pool, caplog):
        data = encode_pool(basic_pool)
        with caplog.at_level(logging.WARNING, logger="vtpool.codec.iop"):
            pool = decode_pool(data[:-1])
        assert pool.ids() == [0]
        assert "after 1 objects" in caplog.text

    def test_lenient_garbage_is_empty(self):
        assert len(decode_pool(b"\x01")) == 0

    def test_lenient_matches_strict_on_valid_data(self, full_pool):
        data = encode_pool(full_pool)
        assert decode_pool(data) == decode_pool_strict(data)
