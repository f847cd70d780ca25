"""
Tests for the attribute projector.

These tests verify:
    - The flat Options Map the dialog consumes
    - Exclusion of reserved dictionaries
    - Meta-attribute classification and association
    - The structured view behind the flat map
"""

from compopts.config import EditorSettings
from compopts.model import AttributeDictionary, ComponentDefinition, StoredType
from compopts.projector import (
    project_component_options,
    project_dictionaries,
    project_dictionary,
)
from compopts.units import Length


def build_definition(**dictionaries):
    definition = ComponentDefinition(name="Shelf")
    for name, values in dictionaries.items():
        definition.dictionaries[name] = AttributeDictionary(name, values)
    return definition


class TestOptionsMap:
    """Test the flat Options Map."""

    def test_none_definition(self):
        assert project_component_options(None) == {}

    def test_definition_without_dictionaries(self):
        assert project_component_options(ComponentDefinition(name="Bare")) == {}

    def test_flat_merge_of_primary_and_meta(self):
        """Should put primary and meta keys at one level."""
        definition = build_definition(dynamic_attributes={
            "lenx": Length(20),
            "_lenx_label": "Width",
            "_lenx_units": "INCHES",
        })
        options = project_component_options(definition)
        assert options == {
            "dynamic_attributes": {
                "lenx": 20.0,
                "_lenx_label": "Width",
                "_lenx_units": "INCHES",
            }
        }

    def test_primary_keys_before_meta_keys(self):
        definition = build_definition(d={
            "_b_label": "B",
            "b": 2,
            "_a_label": "A",
            "a": 1,
        })
        assert list(project_component_options(definition)["d"]) == ["b", "a", "_b_label", "_a_label"]

    def test_values_are_raw(self):
        """Should hand out stored values untouched."""
        length = Length(12)
        definition = build_definition(d={"lenx": length, "flag": True, "count": 2})
        flat = project_component_options(definition)["d"]
        assert flat["lenx"] is length
        assert flat["flag"] is True
        assert flat["count"] == 2

    def test_reserved_dictionaries_never_appear(self):
        definition = build_definition(
            dc_options={"lenx": Length(1), "_lenx_label": "X"},
            dc_dictionary={"anything": "goes"},
            custom={"color": "red"},
        )
        assert project_component_options(definition) == {"custom": {"color": "red"}}

    def test_empty_dictionaries_omitted(self):
        definition = build_definition(empty={}, custom={"color": "red"})
        assert "empty" not in project_component_options(definition)

    def test_meta_only_dictionary_kept(self):
        definition = build_definition(d={"_name": "Shelf"})
        assert project_component_options(definition) == {"d": {"_name": "Shelf"}}

    def test_lone_underscore_kept_as_primary(self):
        """Should keep the key `_` unchanged and present."""
        definition = build_definition(d={"_": 5})
        projection = project_dictionaries(definition)[0]

        assert "_" in projection.attributes
        assert projection.meta == {}
        assert project_component_options(definition) == {"d": {"_": 5}}

    def test_custom_excluded_prefixes(self):
        settings = EditorSettings(excluded_prefixes=["internal_"])
        definition = build_definition(internal_state={"x": 1}, dc_options={"y": 2})
        assert project_component_options(definition, settings) == {"dc_options": {"y": 2}}

    def test_projection_does_not_mutate(self):
        definition = build_definition(d={"a": 1, "_a_label": "A"}, dc_x={"b": 2})
        before = definition.snapshot()
        project_component_options(definition)
        assert definition.snapshot() == before


class TestStructuredView:
    """Test DictionaryProjection and Attribute records."""

    def test_meta_associated_by_prefix(self):
        projection = project_dictionary(AttributeDictionary("d", {
            "lenx": Length(10),
            "_lenx_label": "Width",
            "_lenx_units": "CENTIMETERS",
        }))
        attr = projection.attributes["lenx"]
        assert attr.meta == {"label": "Width", "units": "CENTIMETERS"}
        assert attr.stored_type is StoredType.LENGTH
        assert attr.label == "Width"

    def test_longest_primary_wins(self):
        """Should attach `_door_width_label` to `door_width`, not `door`."""
        projection = project_dictionary(AttributeDictionary("d", {
            "door": 1,
            "door_width": 2,
            "_door_width_label": "Door width",
            "_door_label": "Door",
        }))
        assert projection.attributes["door_width"].meta == {"label": "Door width"}
        assert projection.attributes["door"].meta == {"label": "Door"}

    def test_label_falls_back_to_key(self):
        projection = project_dictionary(AttributeDictionary("d", {"material": "Oak"}))
        assert projection.attributes["material"].label == "material"

    def test_unassociated_meta(self):
        projection = project_dictionary(AttributeDictionary("d", {
            "lenx": 1,
            "_name": "Shelf",
            "_lenx_label": "Width",
        }))
        assert projection.unassociated_meta == {"_name": "Shelf"}
        assert projection.meta == {"_name": "Shelf", "_lenx_label": "Width"}

    def test_to_flat_matches_storage(self):
        values = {"a": 1, "_a_label": "A", "_orphan": "x", "b": "two"}
        projection = project_dictionary(AttributeDictionary("d", values))
        assert projection.to_flat() == values

    def test_project_dictionaries_order(self):
        definition = build_definition(first={"a": 1}, dc_hidden={"b": 2}, second={"c": 3})
        assert [p.name for p in project_dictionaries(definition)] == ["first", "second"]

    def test_project_dictionaries_none(self):
        assert project_dictionaries(None) == []
