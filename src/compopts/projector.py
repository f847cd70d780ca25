"""
Attribute projector (read side of the dialog).

Reads a definition's attribute dictionaries into a structured view,
then flattens that view into the Options Map the dialog consumes:

    {
        "dynamic_attributes": {
            "lenx": 30.0,
            "material": "Oak",
            "_lenx_label": "Width",
            "_lenx_units": "CENTIMETERS",
        },
    }

Primary keys come first, meta keys after, both in storage order.
The dialog looks meta-attributes up by their full key, so the flat
shape is part of the UI contract.

IMPORTANT: Projection never writes and never opens an operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import EditorSettings
from .model import (
    AttributeDictionary,
    ComponentDefinition,
    META_PREFIX,
    StoredType,
    TypedValue,
    is_meta_key,
)

OptionsMap = Dict[str, Dict[str, Any]]


@dataclass
class Attribute:
    """
    A primary attribute with the meta-attributes that describe it.

    Properties:
        key: Primary key (e.g. "lenx")
        value: Stored value with its type tag
        meta: Meta values keyed by suffix ("label", "units", ...)
    """
    key: str
    value: TypedValue
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def stored_type(self) -> StoredType:
        return self.value.stored_type

    @property
    def label(self) -> str:
        return self.meta.get("label", self.key)


@dataclass
class DictionaryProjection:
    """
    Structured view of one attribute dictionary.

    `meta` keeps every meta-attribute under its full key, associated
    or not, so `to_flat()` can rebuild the storage view exactly.
    """
    name: str
    attributes: Dict[str, Attribute] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def unassociated_meta(self) -> Dict[str, Any]:
        """Meta-attributes whose key names no primary attribute."""
        return {k: v for k, v in self.meta.items() if _owner_of(k, self.attributes) is None}

    def is_empty(self) -> bool:
        return not self.attributes and not self.meta

    def to_flat(self) -> Dict[str, Any]:
        flat: Dict[str, Any] = {key: attr.value.value for key, attr in self.attributes.items()}
        flat.update(self.meta)
        return flat


def _owner_of(meta_key: str, attributes: Dict[str, Attribute]) -> Optional[str]:
    """
    Find the primary key a meta key describes.

    `_lenx_label` belongs to `lenx`. When several primaries match
    (`len` and `lenx`), the longest wins.
    """
    owner = None
    for key in attributes:
        if meta_key.startswith(f"{META_PREFIX}{key}_") and len(meta_key) > len(key) + 2:
            if owner is None or len(key) > len(owner):
                owner = key
    return owner


def project_dictionary(dictionary: AttributeDictionary) -> DictionaryProjection:
    projection = DictionaryProjection(name=dictionary.name)
    for key, value in dictionary.items():
        if is_meta_key(key):
            projection.meta[key] = value
        else:
            projection.attributes[key] = Attribute(key=key, value=TypedValue.of(value))

    for meta_key, meta_value in projection.meta.items():
        owner = _owner_of(meta_key, projection.attributes)
        if owner is not None:
            suffix = meta_key[len(owner) + 2:]
            projection.attributes[owner].meta[suffix] = meta_value
    return projection


def project_dictionaries(
    definition: Optional[ComponentDefinition],
    settings: Optional[EditorSettings] = None,
) -> List[DictionaryProjection]:
    """
    Structured view of every user-facing dictionary of a definition.

    Excluded dictionaries and dictionaries without attributes are left out.
    """
    if definition is None:
        return []
    settings = settings or EditorSettings()

    projections = []
    for dictionary in definition.attribute_dictionaries:
        if settings.is_excluded(dictionary.name):
            continue
        projection = project_dictionary(dictionary)
        if not projection.is_empty():
            projections.append(projection)
    return projections


def project_component_options(
    definition: Optional[ComponentDefinition],
    settings: Optional[EditorSettings] = None,
) -> OptionsMap:
    """
    Build the Options Map for a definition.

    Args:
        definition: Definition to read, or None
        settings: Exclusion rules (defaults to EditorSettings())

    Returns:
        Dictionary name -> flat key/value map; {} for None
    """
    return {p.name: p.to_flat() for p in project_dictionaries(definition, settings)}
