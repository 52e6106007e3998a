"""Tests for smart default names."""

from tests.pool_test_helpers import make_object
from vtpool.pool import ObjectType, default_object_name, generate_smart_default_name, object_type_name
from vtpool.pool.naming import name_prefix


class TestGenerateSmartDefaultName:
    """Tests for generate_smart_default_name."""

    def test_first_name_is_one(self):
        assert generate_smart_default_name(ObjectType.DATA_MASK, {}) == "Data Mask 1"

    def test_skips_taken_numbers(self):
        existing = {"Button 1": ObjectType.BUTTON, "Button 2": ObjectType.BUTTON}
        assert generate_smart_default_name(ObjectType.BUTTON, existing) == "Button 3"

    def test_fills_lowest_gap(self):
        existing = {"Key 1": ObjectType.KEY, "Key 3": ObjectType.KEY}
        assert generate_smart_default_name(ObjectType.KEY, existing) == "Key 2"

    def test_only_names_matter(self):
        # A user who called a container "Button 1" still blocks that name.
        existing = {"Button 1": ObjectType.CONTAINER}
        assert generate_smart_default_name(ObjectType.BUTTON, existing) == "Button 2"

    def test_unrelated_names_ignored(self):
        existing = {"Start": ObjectType.KEY, "Key": ObjectType.KEY}
        assert generate_smart_default_name(ObjectType.KEY, existing) == "Key 1"

    def test_every_type_has_prefix(self):
        for object_type in ObjectType:
            assert name_prefix(object_type)
        assert name_prefix(ObjectType.PICTURE_GRAPHIC) == "Picture"
        assert name_prefix(ObjectType.NUMBER_VARIABLE) == "Number Var"


class TestDefaultObjectName:
    """Tests for the fallback name."""

    def test_format(self):
        obj = make_object(ObjectType.OUTPUT_STRING, 11002)
        assert default_object_name(obj) == "Object 11002 (Output String)"

    def test_type_name(self):
        assert object_type_name(ObjectType.SOFT_KEY_MASK) == "Soft Key Mask"
