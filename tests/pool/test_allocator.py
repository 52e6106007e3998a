"""Tests for identifier ranges and allocation."""

import pytest

from tests.pool_test_helpers import make_object, make_pool
from vtpool.errors import ObjectIdRangeExhausted, PoolError
from vtpool.pool import (
    OBJECT_ID_RANGES,
    ObjectPool,
    ObjectType,
    allocate_object_id,
    object_id_range,
    object_type_for_id,
)


class TestObjectIdRanges:
    """Tests for the per-type range table."""

    def test_every_type_has_a_range(self):
        assert set(OBJECT_ID_RANGES) == set(ObjectType)

    def test_ranges_do_not_overlap(self):
        seen: dict[int, ObjectType] = {}
        for object_type, id_range in OBJECT_ID_RANGES.items():
            for object_id in {id_range.start, id_range.stop - 1}:
                assert object_id not in seen, f"{object_type} overlaps {seen.get(object_id)}"
                seen[object_id] = object_type
        ordered = sorted(OBJECT_ID_RANGES.values(), key=lambda r: r.start)
        for a, b in zip(ordered, ordered[1:]):
            assert a.stop <= b.start

    def test_known_ranges(self):
        assert object_id_range(ObjectType.WORKING_SET) == range(0, 1)
        assert object_id_range(ObjectType.DATA_MASK) == range(1000, 2000)
        assert object_id_range(ObjectType.BUTTON) == range(6000, 7000)
        assert object_id_range(ObjectType.OUTPUT_LIST) == range(37000, 38000)
        assert object_id_range(ObjectType.GRAPHIC_DATA) == range(48000, 49000)

    def test_ranges_exclude_null_id(self):
        for id_range in OBJECT_ID_RANGES.values():
            assert 0xFFFF not in id_range

    def test_object_type_for_id(self):
        assert object_type_for_id(6123) == ObjectType.BUTTON
        assert object_type_for_id(0) == ObjectType.WORKING_SET
        assert object_type_for_id(500) is None


class TestAllocateObjectId:
    """Tests for allocate_object_id."""

    def test_first_free_in_empty_pool(self):
        assert allocate_object_id(ObjectPool(), ObjectType.BUTTON) == 6000

    def test_skips_used_ids(self, basic_pool):
        assert allocate_object_id(basic_pool, ObjectType.DATA_MASK) == 1001

    def test_fills_gaps_lowest_first(self):
        pool = make_pool(
            make_object(ObjectType.BUTTON, 6000),
            make_object(ObjectType.BUTTON, 6002),
        )
        assert allocate_object_id(pool, ObjectType.BUTTON) == 6001

    def test_reserved_ids_count_as_taken(self):
        assert allocate_object_id(ObjectPool(), ObjectType.BUTTON, reserved={6000, 6001}) == 6002

    def test_does_not_modify_pool(self, basic_pool):
        before = basic_pool.clone()
        allocate_object_id(basic_pool, ObjectType.KEY)
        assert basic_pool == before

    def test_allocated_id_within_range_for_every_type(self, full_pool):
        for object_type in ObjectType:
            if object_type == ObjectType.WORKING_SET:
                continue
            object_id = allocate_object_id(full_pool, object_type)
            assert object_id in object_id_range(object_type)
            assert object_id not in full_pool

    def test_exhausted_range_raises(self):
        pool = make_pool(make_object(ObjectType.WORKING_SET, 0))
        with pytest.raises(ObjectIdRangeExhausted) as exc_info:
            allocate_object_id(pool, ObjectType.WORKING_SET)
        assert exc_info.value.first == 0
        assert exc_info.value.last == 0
        assert isinstance(exc_info.value, PoolError)

    def test_full_thousand_range_exhausted(self):
        pool = ObjectPool(make_object(ObjectType.KEY, i) for i in range(5000, 6000))
        with pytest.raises(ObjectIdRangeExhausted):
            allocate_object_id(pool, ObjectType.KEY)
