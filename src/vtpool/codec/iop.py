"""IOP codec - the raw interchange binary of an object pool.

An IOP stream is a plain concatenation of object records. Each record is
the object id (u16), the type code (u8) and then the type's attributes in
schema order, all little-endian. The stream carries no names, selection or
history.
"""

from __future__ import annotations

import logging
import struct
from typing import Any, Callable

from vtpool.errors import IopDecodeError
from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import (
    CodePlane,
    MacroRef,
    ObjectLabel,
    ObjectRef,
    ObjectType,
    Point,
    PoolObject,
    nullable_from_wire,
    nullable_to_wire,
)
from vtpool.pool.schema import Field, FieldKind, schema_for

logger = logging.getLogger(__name__)

_HEADER = struct.Struct("<HB")

_SCALAR_FORMATS = {
    FieldKind.U8: "<B",
    FieldKind.U16: "<H",
    FieldKind.U32: "<I",
    FieldKind.I16: "<h",
    FieldKind.I32: "<i",
    FieldKind.F32: "<f",
    FieldKind.NAME: "<Q",
    FieldKind.REF: "<H",
    FieldKind.COUNT8: "<B",
    FieldKind.COUNT16: "<H",
    FieldKind.COUNT32: "<I",
}

STRING_ENCODING = "latin-1"


# ─────────────────────────────────────────────────────────────────────────────
# Encoding
# ─────────────────────────────────────────────────────────────────────────────


def _encode_list(kind: FieldKind, value: Any) -> bytes:
    if kind == FieldKind.BYTES:
        return bytes(value)
    if kind == FieldKind.REF_LIST:
        return b"".join(struct.pack("<H", item) for item in value)
    if kind == FieldKind.NULLABLE_REF_LIST:
        return b"".join(struct.pack("<H", nullable_to_wire(item)) for item in value)
    if kind == FieldKind.OBJECT_REFS:
        return b"".join(struct.pack("<Hhh", r.id, r.x, r.y) for r in value)
    if kind == FieldKind.MACRO_REFS:
        return b"".join(struct.pack("<BB", m.event_id, m.macro_id) for m in value)
    if kind == FieldKind.POINTS:
        return b"".join(struct.pack("<HH", p.x, p.y) for p in value)
    if kind == FieldKind.LANGUAGE_CODES:
        return b"".join(_fixed_text(code, 2) for code in value)
    if kind == FieldKind.LANGUAGE_PAIRS:
        return b"".join(_fixed_text(lang, 2) + _fixed_text(country, 2) for lang, country in value)
    if kind == FieldKind.COLOURS:
        return b"".join(struct.pack("<BBBB", *colour) for colour in value)
    if kind == FieldKind.LABELS:
        return b"".join(
            struct.pack(
                "<HHBH",
                label.id,
                nullable_to_wire(label.string_variable_reference),
                label.font_type,
                nullable_to_wire(label.graphic_representation),
            )
            for label in value
        )
    if kind == FieldKind.CODE_PLANES:
        out = bytearray()
        for plane in value:
            out += struct.pack("<BB", plane.number, len(plane.ranges))
            for first, last in plane.ranges:
                out += struct.pack("<HH", first, last)
        return bytes(out)
    raise ValueError(f"Not a list kind: {kind}")


def _fixed_text(text: str, size: int) -> bytes:
    raw = text.encode(STRING_ENCODING)
    if len(raw) != size:
        raise ValueError(f"Expected {size} characters, got {text!r}")
    return raw


def _encode_field(f: Field, obj: PoolObject) -> bytes:
    kind = f.kind
    if kind.is_count:
        return struct.pack(_SCALAR_FORMATS[kind], len(obj.attributes[f.name]))
    value = obj.attributes[f.name]
    if kind == FieldKind.BOOL:
        return struct.pack("<B", 1 if value else 0)
    if kind == FieldKind.NULLABLE_REF:
        return struct.pack("<H", nullable_to_wire(value))
    if kind == FieldKind.STRING8:
        raw = value.encode(STRING_ENCODING)
        return struct.pack("<B", len(raw)) + raw
    if kind == FieldKind.STRING16:
        raw = value.encode(STRING_ENCODING)
        return struct.pack("<H", len(raw)) + raw
    if kind.is_list:
        return _encode_list(kind, value)
    return struct.pack(_SCALAR_FORMATS[kind], value)


def encode_object(obj: PoolObject) -> bytes:
    """Encode one object record.

    Raises:
        ValueError: If an attribute does not fit its wire encoding.
    """
    out = bytearray(_HEADER.pack(obj.id, int(obj.object_type)))
    for f in schema_for(obj.object_type).fields:
        try:
            out += _encode_field(f, obj)
        except (struct.error, KeyError, UnicodeEncodeError, TypeError, AttributeError) as exc:
            raise ValueError(
                f"Object {obj.id} ({obj.object_type.display_name}): "
                f"cannot encode '{f.name}': {exc}"
            ) from exc
    return bytes(out)


def encode_pool(pool: ObjectPool) -> bytes:
    """Serialize a pool to IOP bytes, in pool order."""
    return b"".join(encode_object(obj) for obj in pool)


# ─────────────────────────────────────────────────────────────────────────────
# Decoding
# ─────────────────────────────────────────────────────────────────────────────


class _Reader:
    """Cursor over a byte buffer raising IopDecodeError on truncation."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = data
        self.offset = offset

    def remaining(self) -> int:
        return len(self.data) - self.offset

    def take(self, size: int) -> bytes:
        if size > self.remaining():
            raise IopDecodeError(
                f"Truncated data: need {size} bytes, {self.remaining()} left", self.offset
            )
        chunk = self.data[self.offset : self.offset + size]
        self.offset += size
        return chunk

    def unpack(self, fmt: str) -> tuple[Any, ...]:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))

    def one(self, fmt: str) -> Any:
        return self.unpack(fmt)[0]

    def repeat(self, count: int, read: Callable[[], Any]) -> list[Any]:
        return [read() for _ in range(count)]


def _decode_list(kind: FieldKind, count: int, reader: _Reader) -> Any:
    if kind == FieldKind.BYTES:
        return reader.take(count)
    if kind == FieldKind.REF_LIST:
        return reader.repeat(count, lambda: reader.one("<H"))
    if kind == FieldKind.NULLABLE_REF_LIST:
        return reader.repeat(count, lambda: nullable_from_wire(reader.one("<H")))
    if kind == FieldKind.OBJECT_REFS:
        return reader.repeat(count, lambda: ObjectRef(*reader.unpack("<Hhh")))
    if kind == FieldKind.MACRO_REFS:
        return reader.repeat(count, lambda: MacroRef(*reader.unpack("<BB")))
    if kind == FieldKind.POINTS:
        return reader.repeat(count, lambda: Point(*reader.unpack("<HH")))
    if kind == FieldKind.LANGUAGE_CODES:
        return reader.repeat(count, lambda: reader.take(2).decode(STRING_ENCODING))
    if kind == FieldKind.LANGUAGE_PAIRS:
        return reader.repeat(
            count,
            lambda: (
                reader.take(2).decode(STRING_ENCODING),
                reader.take(2).decode(STRING_ENCODING),
            ),
        )
    if kind == FieldKind.COLOURS:
        return reader.repeat(count, lambda: tuple(reader.unpack("<BBBB")))
    if kind == FieldKind.LABELS:

        def read_label() -> ObjectLabel:
            label_id, string_var, font_type, graphic = reader.unpack("<HHBH")
            return ObjectLabel(
                label_id, nullable_from_wire(string_var), font_type, nullable_from_wire(graphic)
            )

        return reader.repeat(count, read_label)
    if kind == FieldKind.CODE_PLANES:

        def read_plane() -> CodePlane:
            number, range_count = reader.unpack("<BB")
            ranges = reader.repeat(range_count, lambda: tuple(reader.unpack("<HH")))
            return CodePlane(number, ranges)

        return reader.repeat(count, read_plane)
    raise ValueError(f"Not a list kind: {kind}")


def _decode_object(reader: _Reader) -> PoolObject:
    start = reader.offset
    object_id, type_code = _HEADER.unpack(reader.take(_HEADER.size))
    try:
        object_type = ObjectType(type_code)
    except ValueError:
        raise IopDecodeError(
            f"Unknown object type {type_code} for object {object_id}", start
        ) from None

    attributes: dict[str, Any] = {}
    counts: dict[str, int] = {}
    for f in schema_for(object_type).fields:
        kind = f.kind
        if kind.is_count:
            counts[f.name] = reader.one(_SCALAR_FORMATS[kind])
        elif kind == FieldKind.BOOL:
            attributes[f.name] = reader.one("<B") != 0
        elif kind == FieldKind.NULLABLE_REF:
            attributes[f.name] = nullable_from_wire(reader.one("<H"))
        elif kind == FieldKind.STRING8:
            attributes[f.name] = reader.take(reader.one("<B")).decode(STRING_ENCODING)
        elif kind == FieldKind.STRING16:
            attributes[f.name] = reader.take(reader.one("<H")).decode(STRING_ENCODING)
        elif kind.is_list:
            attributes[f.name] = _decode_list(kind, counts[f.name], reader)
        else:
            attributes[f.name] = reader.one(_SCALAR_FORMATS[kind])
    return PoolObject(object_id, object_type, attributes)


def decode_pool_strict(data: bytes) -> ObjectPool:
    """Parse IOP bytes into a pool, failing on any malformed record.

    Raises:
        IopDecodeError: On truncated data, unknown object types or a
            repeated object id.
    """
    reader = _Reader(bytes(data))
    pool = ObjectPool()
    while reader.remaining() > 0:
        start = reader.offset
        obj = _decode_object(reader)
        if obj.id in pool:
            raise IopDecodeError(f"Duplicate object id {obj.id}", start)
        pool.add(obj)
    return pool


def decode_pool(data: bytes) -> ObjectPool:
    """Parse IOP bytes into a pool, keeping whatever decodes cleanly.

    Decoding stops at the first malformed record; the objects before it
    are returned and a warning is logged. An empty or garbage input yields
    an empty pool.
    """
    reader = _Reader(bytes(data))
    pool = ObjectPool()
    while reader.remaining() > 0:
        try:
            obj = _decode_object(reader)
        except IopDecodeError as exc:
            logger.warning("Stopped decoding object pool after %d objects: %s", len(pool), exc)
            break
        pool.add(obj)
    return pool


__all__ = ["encode_object", "encode_pool", "decode_pool", "decode_pool_strict"]
