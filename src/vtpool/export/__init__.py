"""
vtpool.export - Derived outputs of an object pool (C header, size report)
"""

from vtpool.export.header import HEADER_FILE_NAME, generate_header, to_c_identifier
from vtpool.export.report import ObjectSize, log_top_largest_objects, top_largest_objects

__all__ = [
    "HEADER_FILE_NAME",
    "generate_header",
    "to_c_identifier",
    "ObjectSize",
    "top_largest_objects",
    "log_top_largest_objects",
]
