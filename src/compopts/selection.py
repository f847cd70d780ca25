"""
Selection resolver.

Finds the component definition a dialog should edit. Read-only: the
document and its selection are never changed.
"""

from __future__ import annotations

from typing import Optional

from .host import HostDocument
from .model import ComponentDefinition, ComponentInstance


def get_selected_instance(document: HostDocument) -> Optional[ComponentInstance]:
    """
    Return the first selected entity if it is a component instance.

    Only the first element counts; the rest of a multi-selection is ignored.
    """
    selection = document.selection
    if not selection or selection[0] is None:
        return None

    entity = selection[0]
    if not isinstance(entity, ComponentInstance):
        return None
    return entity


def get_selected_component_definition(document: HostDocument) -> Optional[ComponentDefinition]:
    """
    Return the definition behind the current selection.

    Returns:
        ComponentDefinition, or None when the selection is empty,
        starts with None, or starts with something that is not a
        component instance
    """
    instance = get_selected_instance(document)
    if instance is None:
        return None
    return instance.definition
