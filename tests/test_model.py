"""
Tests for the component attribute model.

These tests verify:
    - Stored type classification
    - Attribute dictionary storage rules
    - Definition dictionary lookup and creation
    - Snapshot and restore used by document operations
"""

import pytest
from compopts.model import (
    AttributeDictionary,
    ComponentDefinition,
    ComponentInstance,
    StoredType,
    TypedValue,
    is_meta_key,
)
from compopts.units import Length


class TestStoredType:
    """Test classification of stored values."""

    @pytest.mark.parametrize("value, expected", [
        (Length(10), StoredType.LENGTH),
        (1.5, StoredType.FLOAT),
        (3, StoredType.INTEGER),
        ("Oak", StoredType.STRING),
        (True, StoredType.BOOLEAN),
        (False, StoredType.BOOLEAN),
        (None, StoredType.UNSET),
    ])
    def test_classification(self, value, expected):
        assert StoredType.of(value) is expected

    def test_boolean_is_not_integer(self):
        """Should classify bools before ints."""
        assert StoredType.of(True) is not StoredType.INTEGER

    def test_length_is_not_float(self):
        """Should classify Length before float."""
        assert StoredType.of(Length(1.0)) is StoredType.LENGTH

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            StoredType.of([1, 2])

    def test_typed_value(self):
        tv = TypedValue.of(2)
        assert tv.value == 2
        assert tv.stored_type is StoredType.INTEGER


class TestMetaKeys:
    """Test the meta-attribute naming rule."""

    def test_underscore_prefixed_keys_are_meta(self):
        assert is_meta_key("_lenx_label")
        assert is_meta_key("_x")

    def test_lone_underscore_is_primary(self):
        """Should need a character after the prefix."""
        assert not is_meta_key("_")

    def test_plain_keys_are_primary(self):
        assert not is_meta_key("lenx")
        assert not is_meta_key("len_x")


class TestAttributeDictionary:
    """Test AttributeDictionary storage."""

    def test_keeps_insertion_order(self):
        d = AttributeDictionary("d", {"b": 1, "a": 2})
        assert list(d) == ["b", "a"]
        assert d.items() == [("b", 1), ("a", 2)]

    def test_read_present_value(self):
        d = AttributeDictionary("d", {"lenx": Length(10)})
        tv = d.read("lenx")
        assert tv.stored_type is StoredType.LENGTH
        assert tv.value == 10.0

    def test_read_absent_value(self):
        """Should tag absent keys as UNSET."""
        d = AttributeDictionary("d")
        assert d.read("missing") == TypedValue(None, StoredType.UNSET)

    def test_rejects_unsupported_values(self):
        d = AttributeDictionary("d")
        with pytest.raises(TypeError):
            d["colors"] = ["red"]
        with pytest.raises(TypeError):
            d["nothing"] = None
        assert len(d) == 0

    def test_rejects_empty_key(self):
        d = AttributeDictionary("d")
        with pytest.raises(TypeError):
            d[""] = 1

    def test_snapshot_is_a_copy(self):
        d = AttributeDictionary("d", {"a": 1})
        snap = d.snapshot()
        d["a"] = 2
        assert snap == {"a": 1}
        d.restore(snap)
        assert d["a"] == 1


class TestComponentDefinition:
    """Test ComponentDefinition objects."""

    def test_empty_definition(self):
        definition = ComponentDefinition(name="Chair")
        assert definition.attribute_dictionaries == []
        assert definition.instances == []

    def test_attribute_dictionary_lookup(self):
        definition = ComponentDefinition(name="Chair")
        assert definition.attribute_dictionary("custom") is None
        created = definition.attribute_dictionary("custom", create=True)
        assert created is definition.attribute_dictionary("custom")
        assert created.name == "custom"

    def test_get_and_set_attribute(self):
        definition = ComponentDefinition(name="Chair")
        definition.set_attribute("custom", "legs", 4)
        assert definition.get_attribute("custom", "legs") == 4
        assert definition.get_attribute("custom", "arms", "none") == "none"
        assert definition.get_attribute("other", "legs") is None

    def test_place_links_instance(self):
        definition = ComponentDefinition(name="Chair")
        instance = definition.place()
        assert isinstance(instance, ComponentInstance)
        assert instance.definition is definition
        assert instance.name == "Chair"
        assert definition.instances == [instance]

    def test_restore_drops_new_dictionaries(self):
        """Should remove dictionaries created after the snapshot."""
        definition = ComponentDefinition(name="Chair")
        definition.set_attribute("custom", "legs", 4)
        snap = definition.snapshot()

        definition.set_attribute("custom", "legs", 3)
        definition.set_attribute("added", "x", 1)
        definition.restore(snap)

        assert list(definition.dictionaries) == ["custom"]
        assert definition.get_attribute("custom", "legs") == 4

    def test_restore_keeps_empty_dictionaries(self):
        definition = ComponentDefinition(name="Chair")
        empty = definition.attribute_dictionary("empty", create=True)
        definition.restore(definition.snapshot())
        assert definition.attribute_dictionary("empty") is empty

    def test_repr_does_not_recurse(self):
        definition = ComponentDefinition(name="Chair")
        definition.place()
        assert "Chair" in repr(definition)
