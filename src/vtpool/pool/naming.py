"""Smart naming - readable, collision-free default names for objects.

A smart name is the type's short prefix followed by the lowest number that
is not already taken, e.g. "Data Mask 1", "Button 3".
"""

from __future__ import annotations

from typing import Mapping

from vtpool.pool.objects import ObjectType, PoolObject

_PREFIXES = {
    ObjectType.WORKING_SET: "Working Set",
    ObjectType.DATA_MASK: "Data Mask",
    ObjectType.ALARM_MASK: "Alarm Mask",
    ObjectType.CONTAINER: "Container",
    ObjectType.SOFT_KEY_MASK: "Soft Key Mask",
    ObjectType.KEY: "Key",
    ObjectType.BUTTON: "Button",
    ObjectType.INPUT_BOOLEAN: "Input Bool",
    ObjectType.INPUT_STRING: "Input String",
    ObjectType.INPUT_NUMBER: "Input Number",
    ObjectType.INPUT_LIST: "Input List",
    ObjectType.OUTPUT_STRING: "Output String",
    ObjectType.OUTPUT_NUMBER: "Output Number",
    ObjectType.OUTPUT_LIST: "Output List",
    ObjectType.OUTPUT_LINE: "Line",
    ObjectType.OUTPUT_RECTANGLE: "Rectangle",
    ObjectType.OUTPUT_ELLIPSE: "Ellipse",
    ObjectType.OUTPUT_POLYGON: "Polygon",
    ObjectType.OUTPUT_METER: "Meter",
    ObjectType.OUTPUT_LINEAR_BAR_GRAPH: "Linear Bar Graph",
    ObjectType.OUTPUT_ARCHED_BAR_GRAPH: "Arched Bar Graph",
    ObjectType.PICTURE_GRAPHIC: "Picture",
    ObjectType.NUMBER_VARIABLE: "Number Var",
    ObjectType.STRING_VARIABLE: "String Var",
    ObjectType.FONT_ATTRIBUTES: "Font",
    ObjectType.LINE_ATTRIBUTES: "Line Attr",
    ObjectType.FILL_ATTRIBUTES: "Fill Attr",
    ObjectType.INPUT_ATTRIBUTES: "Input Attr",
    ObjectType.OBJECT_POINTER: "Pointer",
    ObjectType.MACRO: "Macro",
    ObjectType.AUXILIARY_FUNCTION_TYPE1: "Aux Function 1",
    ObjectType.AUXILIARY_INPUT_TYPE1: "Aux Input 1",
    ObjectType.AUXILIARY_FUNCTION_TYPE2: "Aux Function 2",
    ObjectType.AUXILIARY_INPUT_TYPE2: "Aux Input 2",
    ObjectType.AUXILIARY_CONTROL_DESIGNATOR_TYPE2: "Aux Designator",
    ObjectType.WINDOW_MASK: "Window Mask",
    ObjectType.KEY_GROUP: "Key Group",
    ObjectType.GRAPHICS_CONTEXT: "Graphics Context",
    ObjectType.EXTENDED_INPUT_ATTRIBUTES: "Ext Input Attr",
    ObjectType.COLOUR_MAP: "Colour Map",
    ObjectType.OBJECT_LABEL_REFERENCE_LIST: "Label List",
    ObjectType.EXTERNAL_OBJECT_DEFINITION: "Ext Object Def",
    ObjectType.EXTERNAL_REFERENCE_NAME: "Ext Ref Name",
    ObjectType.EXTERNAL_OBJECT_POINTER: "Ext Pointer",
    ObjectType.ANIMATION: "Animation",
    ObjectType.COLOUR_PALETTE: "Colour Palette",
    ObjectType.GRAPHIC_DATA: "Graphic Data",
    ObjectType.WORKING_SET_SPECIAL_CONTROLS: "WS Special Controls",
    ObjectType.SCALED_GRAPHIC: "Scaled Graphic",
}


def object_type_name(object_type: ObjectType) -> str:
    """Display name of a type, as used in default names."""
    return ObjectType(object_type).display_name


def name_prefix(object_type: ObjectType) -> str:
    """Short prefix used for smart names of a type."""
    return _PREFIXES.get(ObjectType(object_type), object_type_name(object_type))


def default_object_name(obj: PoolObject) -> str:
    """Fallback name for an object without a user-given name."""
    return f"Object {obj.id} ({object_type_name(obj.object_type)})"


def generate_smart_default_name(
    object_type: ObjectType,
    existing_names: Mapping[str, ObjectType],
) -> str:
    """Generate a type-prefixed name that does not collide with existing names.

    Args:
        object_type: Type of the object being named.
        existing_names: Names already in use (name -> type); only the keys
            are consulted.

    Returns:
        "<prefix> <n>" with the smallest n >= 1 not in existing_names.
    """
    prefix = name_prefix(object_type)
    number = 1
    while f"{prefix} {number}" in existing_names:
        number += 1
    return f"{prefix} {number}"


__all__ = [
    "object_type_name",
    "name_prefix",
    "default_object_name",
    "generate_smart_default_name",
]
