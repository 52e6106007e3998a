"""Identifier allocation within fixed per-type ranges.

Every object type owns a disjoint block of identifiers. Allocation returns
the lowest free identifier of the block; it never reserves anything, the
caller claims the identifier by inserting the object.
"""

from __future__ import annotations

from typing import Collection

from vtpool.errors import ObjectIdRangeExhausted
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import ObjectType

_T = ObjectType

OBJECT_ID_RANGES: dict[ObjectType, range] = {
    _T.WORKING_SET: range(0, 1),
    _T.DATA_MASK: range(1000, 2000),
    _T.ALARM_MASK: range(2000, 3000),
    _T.CONTAINER: range(3000, 4000),
    _T.SOFT_KEY_MASK: range(4000, 5000),
    _T.KEY: range(5000, 6000),
    _T.BUTTON: range(6000, 7000),
    _T.INPUT_BOOLEAN: range(7000, 8000),
    _T.INPUT_STRING: range(8000, 9000),
    _T.INPUT_NUMBER: range(9000, 10000),
    _T.INPUT_LIST: range(10000, 11000),
    _T.OUTPUT_STRING: range(11000, 12000),
    _T.OUTPUT_NUMBER: range(12000, 13000),
    _T.OUTPUT_LINE: range(13000, 14000),
    _T.OUTPUT_RECTANGLE: range(14000, 15000),
    _T.OUTPUT_ELLIPSE: range(15000, 16000),
    _T.OUTPUT_POLYGON: range(16000, 17000),
    _T.OUTPUT_METER: range(17000, 18000),
    _T.OUTPUT_LINEAR_BAR_GRAPH: range(18000, 19000),
    _T.OUTPUT_ARCHED_BAR_GRAPH: range(19000, 20000),
    _T.PICTURE_GRAPHIC: range(20000, 21000),
    _T.NUMBER_VARIABLE: range(21000, 22000),
    _T.STRING_VARIABLE: range(22000, 23000),
    _T.FONT_ATTRIBUTES: range(23000, 24000),
    _T.LINE_ATTRIBUTES: range(24000, 25000),
    _T.FILL_ATTRIBUTES: range(25000, 26000),
    _T.INPUT_ATTRIBUTES: range(26000, 27000),
    _T.OBJECT_POINTER: range(27000, 28000),
    _T.MACRO: range(28000, 29000),
    _T.AUXILIARY_FUNCTION_TYPE1: range(29000, 30000),
    _T.AUXILIARY_INPUT_TYPE1: range(30000, 31000),
    _T.AUXILIARY_FUNCTION_TYPE2: range(31000, 32000),
    _T.AUXILIARY_INPUT_TYPE2: range(32000, 33000),
    _T.AUXILIARY_CONTROL_DESIGNATOR_TYPE2: range(33000, 34000),
    _T.COLOUR_MAP: range(34000, 35000),
    _T.GRAPHICS_CONTEXT: range(35000, 36000),
    _T.COLOUR_PALETTE: range(36000, 37000),
    _T.OUTPUT_LIST: range(37000, 38000),
    _T.WORKING_SET_SPECIAL_CONTROLS: range(38000, 39000),
    _T.SCALED_GRAPHIC: range(39000, 40000),
    _T.WINDOW_MASK: range(40000, 41000),
    _T.KEY_GROUP: range(41000, 42000),
    _T.EXTENDED_INPUT_ATTRIBUTES: range(42000, 43000),
    _T.EXTERNAL_OBJECT_POINTER: range(43000, 44000),
    _T.EXTERNAL_OBJECT_DEFINITION: range(44000, 45000),
    _T.EXTERNAL_REFERENCE_NAME: range(45000, 46000),
    _T.OBJECT_LABEL_REFERENCE_LIST: range(46000, 47000),
    _T.ANIMATION: range(47000, 48000),
    _T.GRAPHIC_DATA: range(48000, 49000),
}

del _T


def object_id_range(object_type: ObjectType) -> range:
    """Return the reserved identifier range of an object type."""
    return OBJECT_ID_RANGES[ObjectType(object_type)]


def object_type_for_id(object_id: int) -> ObjectType | None:
    """Return the type whose range contains an identifier, if any."""
    for object_type, id_range in OBJECT_ID_RANGES.items():
        if object_id in id_range:
            return object_type
    return None


def allocate_object_id(
    pool: ObjectPool,
    object_type: ObjectType,
    reserved: Collection[int] = (),
) -> int:
    """Find the lowest identifier of a type's range not used in the pool.

    Args:
        pool: Pool whose identifiers are taken.
        object_type: Type to allocate for.
        reserved: Identifiers that count as taken even though they are not
            in the pool (e.g. ones already handed out in the same batch).

    Returns:
        The allocated identifier.

    Raises:
        ObjectIdRangeExhausted: If every identifier of the range is taken.
    """
    id_range = object_id_range(object_type)
    for candidate in id_range:
        if candidate not in pool and candidate not in reserved:
            return candidate
    raise ObjectIdRangeExhausted(object_type, id_range.start, id_range.stop - 1)


def _check_ranges() -> None:
    missing = set(ObjectType) - set(OBJECT_ID_RANGES)
    if missing:
        raise RuntimeError(f"Object types without ID range: {sorted(missing)}")
    ordered = sorted(OBJECT_ID_RANGES.items(), key=lambda item: item[1].start)
    for (type_a, range_a), (type_b, range_b) in zip(ordered, ordered[1:]):
        if range_a.stop > range_b.start:
            raise RuntimeError(f"ID ranges of {type_a.name} and {type_b.name} overlap")


_check_ranges()


__all__ = [
    "OBJECT_ID_RANGES",
    "object_id_range",
    "object_type_for_id",
    "allocate_object_id",
]
