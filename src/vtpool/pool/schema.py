"""Object schemas - per-type attribute layouts.

Each VT object type is described by an ordered tuple of Field entries in
wire order. The codec walks these to encode and decode IOP records, and the
reference helpers walk them to find every identifier an object points at.

List attributes have a separate COUNT field placed where the VT standard
puts the count; the list body follows later in the record.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from vtpool.pool.objects import NULL_OBJECT_ID, ObjectType, Point


class FieldKind(Enum):
    """Wire encodings of object attributes."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    I16 = "i16"
    I32 = "i32"
    F32 = "f32"
    BOOL = "bool"
    NAME = "name"  # 64-bit ISO NAME
    STRING8 = "string8"  # u8 length + bytes
    STRING16 = "string16"  # u16 length + bytes
    COUNT8 = "count8"
    COUNT16 = "count16"
    COUNT32 = "count32"
    REF = "ref"
    NULLABLE_REF = "nullable_ref"
    REF_LIST = "ref_list"
    NULLABLE_REF_LIST = "nullable_ref_list"
    OBJECT_REFS = "object_refs"
    MACRO_REFS = "macro_refs"
    POINTS = "points"
    LANGUAGE_CODES = "language_codes"
    LANGUAGE_PAIRS = "language_pairs"
    COLOURS = "colours"
    LABELS = "labels"
    CODE_PLANES = "code_planes"
    BYTES = "bytes"

    @property
    def is_count(self) -> bool:
        return self in (FieldKind.COUNT8, FieldKind.COUNT16, FieldKind.COUNT32)

    @property
    def is_list(self) -> bool:
        return self in _LIST_KINDS

    @property
    def is_reference(self) -> bool:
        """True for kinds whose values are (or contain) object identifiers."""
        return self in _REFERENCE_KINDS


_LIST_KINDS = frozenset(
    {
        FieldKind.REF_LIST,
        FieldKind.NULLABLE_REF_LIST,
        FieldKind.OBJECT_REFS,
        FieldKind.MACRO_REFS,
        FieldKind.POINTS,
        FieldKind.LANGUAGE_CODES,
        FieldKind.LANGUAGE_PAIRS,
        FieldKind.COLOURS,
        FieldKind.LABELS,
        FieldKind.CODE_PLANES,
        FieldKind.BYTES,
    }
)

_REFERENCE_KINDS = frozenset(
    {
        FieldKind.REF,
        FieldKind.NULLABLE_REF,
        FieldKind.REF_LIST,
        FieldKind.NULLABLE_REF_LIST,
        FieldKind.OBJECT_REFS,
        FieldKind.LABELS,
    }
)


@dataclass(frozen=True)
class Field:
    """One attribute of an object type.

    Attributes:
        name: Attribute name (for COUNT fields, the name of the counted list).
        kind: Wire encoding.
        structural: For reference kinds, whether the edge is parent->child
            display containment (subject to the no-cycle rule).
        default: Default value for scalar kinds.
    """

    name: str
    kind: FieldKind
    structural: bool = False
    default: Any = None

    def default_value(self) -> Any:
        if self.kind == FieldKind.BYTES:
            return b""
        if self.kind.is_list:
            return copy.deepcopy(self.default) if self.default is not None else []
        if self.kind in (FieldKind.REF, FieldKind.NULLABLE_REF) and self.default is None:
            return NULL_OBJECT_ID if self.kind == FieldKind.REF else None
        if self.kind in (FieldKind.STRING8, FieldKind.STRING16) and self.default is None:
            return ""
        if self.default is None:
            return 0
        return self.default


@dataclass(frozen=True)
class ObjectSchema:
    """Attribute layout of one object type."""

    object_type: ObjectType
    fields: tuple[Field, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        """Names of stored attributes (COUNT fields excluded)."""
        return tuple(f.name for f in self.fields if not f.kind.is_count)

    def attribute_fields(self) -> Iterator[Field]:
        for f in self.fields:
            if not f.kind.is_count:
                yield f

    def reference_fields(self) -> Iterator[Field]:
        for f in self.fields:
            if f.kind.is_reference:
                yield f

    def defaults(self) -> dict[str, Any]:
        """Fresh attribute dict holding every field's default."""
        return {f.name: f.default_value() for f in self.attribute_fields()}


# Field constructors, kept short so the schema table below stays readable.


def u8(name: str, default: int = 0) -> Field:
    return Field(name, FieldKind.U8, default=default)


def u16(name: str, default: int = 0) -> Field:
    return Field(name, FieldKind.U16, default=default)


def u32(name: str, default: int = 0) -> Field:
    return Field(name, FieldKind.U32, default=default)


def i16(name: str, default: int = 0) -> Field:
    return Field(name, FieldKind.I16, default=default)


def i32(name: str, default: int = 0) -> Field:
    return Field(name, FieldKind.I32, default=default)


def f32(name: str, default: float = 0.0) -> Field:
    return Field(name, FieldKind.F32, default=default)


def flag(name: str, default: bool = False) -> Field:
    return Field(name, FieldKind.BOOL, default=default)


def ref(name: str, structural: bool = False) -> Field:
    return Field(name, FieldKind.REF, structural=structural)


def nref(name: str, structural: bool = False) -> Field:
    return Field(name, FieldKind.NULLABLE_REF, structural=structural)


def count8(name: str) -> Field:
    return Field(name, FieldKind.COUNT8)


def count16(name: str) -> Field:
    return Field(name, FieldKind.COUNT16)


def count32(name: str) -> Field:
    return Field(name, FieldKind.COUNT32)


def listed(name: str, kind: FieldKind, structural: bool = False, default: Any = None) -> Field:
    return Field(name, kind, structural=structural, default=default)


OBJECT_REFS = listed("object_refs", FieldKind.OBJECT_REFS, structural=True)
MACRO_REFS = listed("macro_refs", FieldKind.MACRO_REFS)


def children_and_macros() -> tuple[Field, ...]:
    """Trailer shared by container-like objects."""
    return (count8("object_refs"), count8("macro_refs"), OBJECT_REFS, MACRO_REFS)


def macros_only() -> tuple[Field, ...]:
    return (count8("macro_refs"), MACRO_REFS)


def _schema(object_type: ObjectType, *fields: Field | tuple[Field, ...]) -> ObjectSchema:
    flat: list[Field] = []
    for item in fields:
        if isinstance(item, tuple):
            flat.extend(item)
        else:
            flat.append(item)
    return ObjectSchema(object_type, tuple(flat))


T = ObjectType

_SCHEMAS = [
    _schema(
        T.WORKING_SET,
        u8("background_colour"),
        flag("selectable", True),
        ref("active_mask", structural=True),
        count8("object_refs"),
        count8("macro_refs"),
        count8("language_codes"),
        OBJECT_REFS,
        MACRO_REFS,
        listed("language_codes", FieldKind.LANGUAGE_CODES),
    ),
    _schema(
        T.DATA_MASK,
        u8("background_colour"),
        nref("soft_key_mask", structural=True),
        children_and_macros(),
    ),
    _schema(
        T.ALARM_MASK,
        u8("background_colour"),
        nref("soft_key_mask", structural=True),
        u8("priority"),
        u8("acoustic_signal"),
        children_and_macros(),
    ),
    _schema(
        T.CONTAINER,
        u16("width"),
        u16("height"),
        flag("hidden"),
        children_and_macros(),
    ),
    _schema(
        T.SOFT_KEY_MASK,
        u8("background_colour"),
        count8("objects"),
        count8("macro_refs"),
        listed("objects", FieldKind.NULLABLE_REF_LIST, structural=True),
        MACRO_REFS,
    ),
    _schema(
        T.KEY,
        u8("background_colour"),
        u8("key_code"),
        children_and_macros(),
    ),
    _schema(
        T.BUTTON,
        u16("width"),
        u16("height"),
        u8("background_colour"),
        u8("border_colour"),
        u8("key_code"),
        u8("options"),
        children_and_macros(),
    ),
    _schema(
        T.INPUT_BOOLEAN,
        u8("background_colour"),
        u16("width"),
        ref("foreground_colour"),
        nref("variable_reference"),
        flag("value"),
        flag("enabled", True),
        macros_only(),
    ),
    _schema(
        T.INPUT_STRING,
        u16("width"),
        u16("height"),
        u8("background_colour"),
        ref("font_attributes"),
        nref("input_attributes"),
        u8("options"),
        nref("variable_reference"),
        u8("justification"),
        Field("value", FieldKind.STRING8),
        flag("enabled", True),
        macros_only(),
    ),
    _schema(
        T.INPUT_NUMBER,
        u16("width"),
        u16("height"),
        u8("background_colour"),
        ref("font_attributes"),
        u8("options"),
        nref("variable_reference"),
        u32("value"),
        u32("min_value"),
        u32("max_value", 0xFFFFFFFF),
        i32("offset"),
        f32("scale", 1.0),
        u8("nr_of_decimals"),
        u8("format"),
        u8("justification"),
        u8("options2"),
        macros_only(),
    ),
    _schema(
        T.INPUT_LIST,
        u16("width"),
        u16("height"),
        nref("variable_reference"),
        u8("value"),
        count8("list_items"),
        u8("options"),
        count8("macro_refs"),
        listed("list_items", FieldKind.NULLABLE_REF_LIST, structural=True),
        MACRO_REFS,
    ),
    _schema(
        T.OUTPUT_STRING,
        u16("width"),
        u16("height"),
        u8("background_colour"),
        ref("font_attributes"),
        u8("options"),
        nref("variable_reference"),
        u8("justification"),
        Field("value", FieldKind.STRING16),
        macros_only(),
    ),
    _schema(
        T.OUTPUT_NUMBER,
        u16("width"),
        u16("height"),
        u8("background_colour"),
        ref("font_attributes"),
        u8("options"),
        nref("variable_reference"),
        u32("value"),
        i32("offset"),
        f32("scale", 1.0),
        u8("nr_of_decimals"),
        u8("format"),
        u8("justification"),
        macros_only(),
    ),
    _schema(
        T.OUTPUT_LINE,
        ref("line_attributes"),
        u16("width"),
        u16("height"),
        u8("line_direction"),
        macros_only(),
    ),
    _schema(
        T.OUTPUT_RECTANGLE,
        ref("line_attributes"),
        u16("width"),
        u16("height"),
        u8("line_suppression"),
        nref("fill_attributes"),
        macros_only(),
    ),
    _schema(
        T.OUTPUT_ELLIPSE,
        ref("line_attributes"),
        u16("width"),
        u16("height"),
        u8("ellipse_type"),
        u8("start_angle"),
        u8("end_angle"),
        nref("fill_attributes"),
        macros_only(),
    ),
    _schema(
        T.OUTPUT_POLYGON,
        u16("width"),
        u16("height"),
        ref("line_attributes"),
        nref("fill_attributes"),
        u8("polygon_type"),
        count8("points"),
        count8("macro_refs"),
        listed("points", FieldKind.POINTS, default=[Point(0, 0), Point(0, 0), Point(0, 0)]),
        MACRO_REFS,
    ),
    _schema(
        T.OUTPUT_METER,
        u16("width"),
        u8("needle_colour"),
        u8("border_colour"),
        u8("arc_and_tick_colour"),
        u8("options"),
        u8("nr_of_ticks"),
        u8("start_angle"),
        u8("end_angle"),
        u16("min_value"),
        u16("max_value"),
        nref("variable_reference"),
        u16("value"),
        macros_only(),
    ),
    _schema(
        T.OUTPUT_LINEAR_BAR_GRAPH,
        u16("width"),
        u16("height"),
        u8("colour"),
        u8("target_line_colour"),
        u8("options"),
        u8("nr_of_ticks"),
        u16("min_value"),
        u16("max_value"),
        nref("variable_reference"),
        u16("value"),
        nref("target_value_variable_reference"),
        u16("target_value"),
        macros_only(),
    ),
    _schema(
        T.OUTPUT_ARCHED_BAR_GRAPH,
        u16("width"),
        u16("height"),
        u8("colour"),
        u8("target_line_colour"),
        u8("options"),
        u8("start_angle"),
        u8("end_angle"),
        u16("bar_graph_width"),
        u16("min_value"),
        u16("max_value"),
        nref("variable_reference"),
        u16("value"),
        nref("target_value_variable_reference"),
        u16("target_value"),
        macros_only(),
    ),
    _schema(
        T.PICTURE_GRAPHIC,
        u16("width"),
        u16("actual_width"),
        u16("actual_height"),
        u8("format"),
        u8("options"),
        u8("transparency_colour"),
        count32("data"),
        count8("macro_refs"),
        listed("data", FieldKind.BYTES),
        MACRO_REFS,
    ),
    _schema(T.NUMBER_VARIABLE, u32("value")),
    _schema(T.STRING_VARIABLE, Field("value", FieldKind.STRING16)),
    _schema(
        T.FONT_ATTRIBUTES,
        u8("font_colour"),
        u8("font_size"),
        u8("font_type"),
        u8("font_style"),
        macros_only(),
    ),
    _schema(
        T.LINE_ATTRIBUTES,
        u8("line_colour"),
        u8("line_width"),
        u16("line_art"),
        macros_only(),
    ),
    _schema(
        T.FILL_ATTRIBUTES,
        u8("fill_type"),
        u8("fill_colour"),
        nref("fill_pattern"),
        macros_only(),
    ),
    _schema(
        T.INPUT_ATTRIBUTES,
        u8("validation_type"),
        Field("validation_string", FieldKind.STRING8),
        macros_only(),
    ),
    _schema(T.OBJECT_POINTER, nref("value", structural=True)),
    _schema(T.MACRO, count16("commands"), listed("commands", FieldKind.BYTES)),
    _schema(
        T.AUXILIARY_FUNCTION_TYPE1,
        u8("background_colour"),
        u8("function_type"),
        count8("object_refs"),
        OBJECT_REFS,
    ),
    _schema(
        T.AUXILIARY_INPUT_TYPE1,
        u8("background_colour"),
        u8("function_type"),
        u8("input_id"),
        count8("object_refs"),
        OBJECT_REFS,
    ),
    _schema(
        T.AUXILIARY_FUNCTION_TYPE2,
        u8("background_colour"),
        u8("function_attributes"),
        count8("object_refs"),
        OBJECT_REFS,
    ),
    _schema(
        T.AUXILIARY_INPUT_TYPE2,
        u8("background_colour"),
        u8("function_attributes"),
        count8("object_refs"),
        OBJECT_REFS,
    ),
    _schema(
        T.AUXILIARY_CONTROL_DESIGNATOR_TYPE2,
        u8("pointer_type"),
        nref("auxiliary_object_id"),
    ),
    _schema(
        T.WINDOW_MASK,
        u16("cell_format"),
        u8("window_type"),
        u8("background_colour"),
        u8("options", 0x01),
        ref("name"),
        nref("window_title", structural=True),
        nref("window_icon", structural=True),
        count8("objects"),
        count8("object_refs"),
        count8("macro_refs"),
        listed("objects", FieldKind.NULLABLE_REF_LIST, structural=True),
        OBJECT_REFS,
        MACRO_REFS,
    ),
    _schema(
        T.KEY_GROUP,
        u8("options", 0x01),
        ref("name"),
        nref("key_group_icon", structural=True),
        count8("objects"),
        count8("macro_refs"),
        listed("objects", FieldKind.REF_LIST, structural=True),
        MACRO_REFS,
    ),
    _schema(
        T.GRAPHICS_CONTEXT,
        u16("viewport_width"),
        u16("viewport_height"),
        i16("viewport_x"),
        i16("viewport_y"),
        u16("canvas_width"),
        u16("canvas_height"),
        f32("viewport_zoom"),
        i16("graphics_cursor_x"),
        i16("graphics_cursor_y"),
        u8("foreground_colour"),
        u8("background_colour"),
        nref("font_attributes_object"),
        nref("line_attributes_object"),
        nref("fill_attributes_object"),
        u8("format"),
        u8("options"),
        u8("transparency_colour"),
    ),
    _schema(
        T.OUTPUT_LIST,
        u16("width"),
        u16("height"),
        nref("variable_reference"),
        u8("value"),
        count8("list_items"),
        count8("macro_refs"),
        listed("list_items", FieldKind.NULLABLE_REF_LIST, structural=True),
        MACRO_REFS,
    ),
    _schema(
        T.EXTENDED_INPUT_ATTRIBUTES,
        u8("validation_type"),
        count8("code_planes"),
        listed("code_planes", FieldKind.CODE_PLANES),
    ),
    _schema(T.COLOUR_MAP, count16("colour_map"), listed("colour_map", FieldKind.BYTES)),
    _schema(
        T.OBJECT_LABEL_REFERENCE_LIST,
        count16("object_labels"),
        listed("object_labels", FieldKind.LABELS),
    ),
    _schema(
        T.EXTERNAL_OBJECT_DEFINITION,
        u8("options", 0x01),
        Field("name", FieldKind.NAME),
        count8("objects"),
        listed("objects", FieldKind.REF_LIST, structural=True),
    ),
    _schema(
        T.EXTERNAL_REFERENCE_NAME,
        u8("options", 0x01),
        Field("name", FieldKind.NAME),
    ),
    _schema(
        T.EXTERNAL_OBJECT_POINTER,
        nref("default_object_id", structural=True),
        nref("external_reference_name_id"),
        # Identifier inside another working set's pool, not a local reference.
        u16("external_object_id", 0xFFFF),
    ),
    _schema(
        T.ANIMATION,
        u16("width"),
        u16("height"),
        u16("refresh_interval"),
        u8("value"),
        flag("enabled", True),
        u8("first_child_index"),
        u8("last_child_index"),
        u8("default_child_index"),
        u8("options"),
        children_and_macros(),
    ),
    _schema(
        T.COLOUR_PALETTE,
        u16("options"),
        count16("colours"),
        listed("colours", FieldKind.COLOURS),
    ),
    _schema(
        T.GRAPHIC_DATA,
        u8("format"),
        count32("data"),
        listed("data", FieldKind.BYTES),
    ),
    _schema(
        T.WORKING_SET_SPECIAL_CONTROLS,
        nref("id_of_colour_map"),
        nref("id_of_colour_palette"),
        count8("language_pairs"),
        listed("language_pairs", FieldKind.LANGUAGE_PAIRS),
    ),
    _schema(
        T.SCALED_GRAPHIC,
        u16("width"),
        u16("height"),
        u8("scale_type"),
        u8("options"),
        nref("value", structural=True),
        macros_only(),
    ),
]

SCHEMAS: dict[ObjectType, ObjectSchema] = {s.object_type: s for s in _SCHEMAS}

del T


def schema_for(object_type: ObjectType) -> ObjectSchema:
    """Return the attribute layout of an object type."""
    return SCHEMAS[ObjectType(object_type)]


def _check_schemas() -> None:
    missing = set(ObjectType) - set(SCHEMAS)
    if missing:
        raise RuntimeError(f"Object types without schema: {sorted(missing)}")
    for schema in _SCHEMAS:
        counted = {f.name for f in schema.fields if f.kind.is_count}
        lists = {f.name for f in schema.fields if f.kind.is_list}
        if counted != lists:
            raise RuntimeError(f"{schema.object_type.name}: counts {counted} != lists {lists}")


_check_schemas()


__all__ = ["FieldKind", "Field", "ObjectSchema", "SCHEMAS", "schema_for"]
