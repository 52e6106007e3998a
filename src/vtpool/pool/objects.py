"""Pool objects - typed, identifier-addressed nodes of a VT object pool.

This module provides the core data structures:
- ObjectType: Enum of VT object types (values are the wire type codes)
- ObjectRef, MacroRef, Point, ObjectLabel, CodePlane: attribute value types
- PoolObject: A single node with its type-specific attributes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional

NULL_OBJECT_ID = 0xFFFF
"""Wire value meaning "no object"."""

MAX_OBJECT_ID = 0xFFFE

ObjectId = int
NullableObjectId = Optional[int]


def validate_object_id(value: int) -> int:
    """Check that a value fits a 16-bit object identifier.

    Raises:
        ValueError: If the value is out of range or is the null value.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Object ID must be an integer, got {value!r}")
    if value < 0 or value > MAX_OBJECT_ID:
        raise ValueError(f"Object ID {value} out of range 0..{MAX_OBJECT_ID}")
    return value


def nullable_from_wire(value: int) -> NullableObjectId:
    """Map a raw 16-bit reference to a nullable identifier."""
    return None if value == NULL_OBJECT_ID else value


def nullable_to_wire(value: NullableObjectId) -> int:
    """Map a nullable identifier to its raw 16-bit reference."""
    return NULL_OBJECT_ID if value is None else value


class ObjectType(IntEnum):
    """VT object types, valued by their ISO 11783-6 type code."""

    WORKING_SET = 0
    DATA_MASK = 1
    ALARM_MASK = 2
    CONTAINER = 3
    SOFT_KEY_MASK = 4
    KEY = 5
    BUTTON = 6
    INPUT_BOOLEAN = 7
    INPUT_STRING = 8
    INPUT_NUMBER = 9
    INPUT_LIST = 10
    OUTPUT_STRING = 11
    OUTPUT_NUMBER = 12
    OUTPUT_LINE = 13
    OUTPUT_RECTANGLE = 14
    OUTPUT_ELLIPSE = 15
    OUTPUT_POLYGON = 16
    OUTPUT_METER = 17
    OUTPUT_LINEAR_BAR_GRAPH = 18
    OUTPUT_ARCHED_BAR_GRAPH = 19
    PICTURE_GRAPHIC = 20
    NUMBER_VARIABLE = 21
    STRING_VARIABLE = 22
    FONT_ATTRIBUTES = 23
    LINE_ATTRIBUTES = 24
    FILL_ATTRIBUTES = 25
    INPUT_ATTRIBUTES = 26
    OBJECT_POINTER = 27
    MACRO = 28
    AUXILIARY_FUNCTION_TYPE1 = 29
    AUXILIARY_INPUT_TYPE1 = 30
    AUXILIARY_FUNCTION_TYPE2 = 31
    AUXILIARY_INPUT_TYPE2 = 32
    AUXILIARY_CONTROL_DESIGNATOR_TYPE2 = 33
    WINDOW_MASK = 34
    KEY_GROUP = 35
    GRAPHICS_CONTEXT = 36
    OUTPUT_LIST = 37
    EXTENDED_INPUT_ATTRIBUTES = 38
    COLOUR_MAP = 39
    OBJECT_LABEL_REFERENCE_LIST = 40
    EXTERNAL_OBJECT_DEFINITION = 41
    EXTERNAL_REFERENCE_NAME = 42
    EXTERNAL_OBJECT_POINTER = 43
    ANIMATION = 44
    COLOUR_PALETTE = 45
    GRAPHIC_DATA = 46
    WORKING_SET_SPECIAL_CONTROLS = 47
    SCALED_GRAPHIC = 48

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. "Data Mask"."""
        return _DISPLAY_NAMES.get(self, self.name.replace("_", " ").title())

    @classmethod
    def from_name(cls, text: str) -> ObjectType:
        """Resolve a type from its enum name or display name (case-insensitive).

        Raises:
            ValueError: If no type matches.
        """
        key = text.strip().upper().replace(" ", "_").replace("-", "_")
        if key in cls.__members__:
            return cls[key]
        for member in cls:
            if member.display_name.lower() == text.strip().lower():
                return member
        raise ValueError(f"Unknown object type: {text!r}")


_DISPLAY_NAMES = {
    ObjectType.AUXILIARY_FUNCTION_TYPE1: "Auxiliary Function Type 1",
    ObjectType.AUXILIARY_INPUT_TYPE1: "Auxiliary Input Type 1",
    ObjectType.AUXILIARY_FUNCTION_TYPE2: "Auxiliary Function Type 2",
    ObjectType.AUXILIARY_INPUT_TYPE2: "Auxiliary Input Type 2",
    ObjectType.AUXILIARY_CONTROL_DESIGNATOR_TYPE2: "Auxiliary Control Designator Type 2",
}


@dataclass
class ObjectRef:
    """A positioned child reference (object id plus x/y offset)."""

    id: int
    x: int = 0
    y: int = 0


@dataclass
class MacroRef:
    """Binding of an event to a macro (8-bit macro number)."""

    event_id: int
    macro_id: int


@dataclass
class Point:
    """A polygon vertex relative to the polygon's origin."""

    x: int
    y: int


@dataclass
class ObjectLabel:
    """One entry of an Object Label Reference List."""

    id: int
    string_variable_reference: NullableObjectId = None
    font_type: int = 0
    graphic_representation: NullableObjectId = None


@dataclass
class CodePlane:
    """Valid character ranges within one code plane."""

    number: int
    ranges: list[tuple[int, int]] = field(default_factory=list)


@dataclass
class PoolObject:
    """A node in a VT object pool.

    The `object_type` determines which attributes are present; the layout
    lives in `vtpool.pool.schema`. Attributes are stored in wire order.

    Attributes:
        id: Unique object identifier within the pool.
        object_type: The VT object type.
        attributes: Type-specific attribute values keyed by field name.
    """

    id: int
    object_type: ObjectType
    attributes: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Get an attribute value."""
        return self.attributes.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Set an attribute value.

        Raises:
            KeyError: If the attribute is not part of this type's schema.
        """
        from vtpool.pool.schema import schema_for

        if name not in schema_for(self.object_type).field_names:
            raise KeyError(f"{self.object_type.display_name} has no attribute '{name}'")
        self.attributes[name] = value

    def __getitem__(self, name: str) -> Any:
        return self.attributes[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __str__(self) -> str:
        return f"{self.id}: {self.object_type.display_name}"


__all__ = [
    "NULL_OBJECT_ID",
    "MAX_OBJECT_ID",
    "ObjectId",
    "NullableObjectId",
    "validate_object_id",
    "nullable_from_wire",
    "nullable_to_wire",
    "ObjectType",
    "ObjectRef",
    "MacroRef",
    "Point",
    "ObjectLabel",
    "CodePlane",
    "PoolObject",
]
