"""C header export - `#define` lines mapping object names to identifiers."""

from __future__ import annotations

import re
from typing import Callable

from vtpool.pool.object_pool import ObjectPool
from vtpool.pool.objects import NULL_OBJECT_ID, PoolObject

HEADER_FILE_NAME = "object_pool.h"

_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9]")


def to_c_identifier(name: str) -> str:
    """Upper-case a name and replace every non-alphanumeric character with '_'.

    A leading digit gets a '_' prefix so the result is a valid C identifier.
    """
    identifier = _NON_IDENTIFIER.sub("_", name).upper()
    if identifier[:1].isdigit():
        identifier = "_" + identifier
    return identifier


def generate_header(pool: ObjectPool, name_of: Callable[[PoolObject], str]) -> str:
    """Render a C header with one define per object, sorted by identifier.

    Names that clean up to an identifier already emitted get an `_<id>`
    suffix.

    Args:
        pool: Objects to export.
        name_of: Returns the display name of an object.

    Returns:
        Header text.
    """
    lines = [
        "// Object IDs for the objects in the object pool.",
        "",
        "#pragma once",
        f"#define UNDEFINED {NULL_OBJECT_ID}",
    ]
    used = {"UNDEFINED"}
    for obj in sorted(pool, key=lambda o: o.id):
        identifier = to_c_identifier(name_of(obj))
        if identifier in used:
            identifier = f"{identifier}_{obj.id}"
        used.add(identifier)
        lines.append(f"#define {identifier} {obj.id}")
    return "\n".join(lines) + "\n"


__all__ = ["HEADER_FILE_NAME", "to_c_identifier", "generate_header"]
