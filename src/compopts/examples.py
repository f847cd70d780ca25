"""
Example document for demos and tests.

Builds a document holding a Dynamic-Component-style cabinet:
    - dynamic_attributes: lenx/leny (lengths) with label and units meta,
      shelves (integer), has_door (integer used as a checkbox),
      material (string)
    - pricing: price (float), in_stock (boolean), sku (string)
    - dc_internal: host bookkeeping, never shown
and one instance of it, selected.
"""
from compopts.host import DynamicComponents, MemoryDocument
from compopts.model import AttributeDictionary, ComponentDefinition
from compopts.units import Length, Unit


def build_example_cabinet() -> ComponentDefinition:
    cabinet = ComponentDefinition(name="Cabinet")
    cabinet.dictionaries["dynamic_attributes"] = AttributeDictionary(
        "dynamic_attributes",
        {
            "lenx": Length.from_unit(60, Unit.CENTIMETER),
            "leny": Length.from_unit(40, Unit.CENTIMETER),
            "shelves": 3,
            "has_door": 1,
            "material": "Oak",
            "_lenx_label": "Width",
            "_lenx_units": "CENTIMETERS",
            "_leny_label": "Depth",
            "_leny_units": "CENTIMETERS",
            "_has_door_formlabel": "Door",
            "_name": "Cabinet",
        },
    )
    cabinet.dictionaries["pricing"] = AttributeDictionary(
        "pricing",
        {
            "price": 129.9,
            "in_stock": True,
            "sku": "CAB-060",
        },
    )
    cabinet.dictionaries["dc_internal"] = AttributeDictionary(
        "dc_internal",
        {"_formatversion": 1.0, "_lengthunits": "CENTIMETERS"},
    )
    return cabinet


def build_example_document(instance_count: int = 2, dynamic_components: bool = True) -> MemoryDocument:
    document = MemoryDocument(
        length_unit=Unit.CENTIMETER,
        dynamic_components=DynamicComponents() if dynamic_components else None,
    )
    cabinet = document.add_definition(build_example_cabinet())

    instances = [cabinet.place(f"Cabinet#{i}") for i in range(1, instance_count + 1)]
    if instances:
        document.select(instances[0])
    return document
