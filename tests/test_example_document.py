"""
Test the example document used by the demo.

Validates the cabinet's dictionaries, stored types and selection.
"""

from compopts.examples import build_example_document
from compopts.model import StoredType
from compopts.projector import project_component_options, project_dictionaries
from compopts.selection import get_selected_component_definition
from compopts.units import Unit


def test_example_document_structure():
    document = build_example_document(instance_count=3)
    cabinet = get_selected_component_definition(document)

    assert cabinet is not None
    assert cabinet.name == "Cabinet"
    assert len(cabinet.instances) == 3
    assert document.length_unit is Unit.CENTIMETER
    assert document.dynamic_components is not None

    # dc_internal is stored but never projected
    assert cabinet.attribute_dictionary("dc_internal") is not None
    assert set(project_component_options(cabinet)) == {"dynamic_attributes", "pricing"}


def test_example_stored_types():
    cabinet = build_example_document().get_definition("Cabinet")
    attributes = {p.name: p.attributes for p in project_dictionaries(cabinet)}

    dynamic = attributes["dynamic_attributes"]
    assert dynamic["lenx"].stored_type is StoredType.LENGTH
    assert dynamic["lenx"].label == "Width"
    assert dynamic["has_door"].stored_type is StoredType.INTEGER
    assert dynamic["has_door"].meta == {"formlabel": "Door"}

    pricing = attributes["pricing"]
    assert pricing["price"].stored_type is StoredType.FLOAT
    assert pricing["in_stock"].stored_type is StoredType.BOOLEAN
    assert pricing["sku"].stored_type is StoredType.STRING


def test_example_without_instances():
    document = build_example_document(instance_count=0, dynamic_components=False)
    assert document.selection == []
    assert document.dynamic_components is None
    assert get_selected_component_definition(document) is None
