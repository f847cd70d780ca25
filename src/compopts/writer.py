"""
Attribute writer (write side of the dialog).

Applies an Update Request to a definition inside one undoable operation:

    {
        "dynamic_attributes": {"lenx": "40cm", "has_door": True},
        "pricing": {"price": "129.90"},
    }

Each value is coerced to the stored type of the attribute it replaces.
A key that fails is recorded and processing goes on, but any failure
aborts the whole operation: either every change lands or none does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .coercion import CoercionError, coerce_value
from .config import EditorSettings
from .host import HostDocument
from .model import ComponentDefinition, TypedValue

logger = logging.getLogger(__name__)

UpdateRequest = Dict[str, Dict[str, Any]]


class KeyOutcome(Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class KeyResult:
    """
    Outcome of writing one attribute.

    Properties:
        dictionary: Dictionary name
        key: Attribute key
        outcome: UPDATED, UNCHANGED or FAILED
        value: Coerced value (the incoming value when FAILED)
        error: Failure message, None otherwise
    """
    dictionary: str
    key: str
    outcome: KeyOutcome
    value: Any = None
    error: Optional[str] = None


@dataclass
class UpdateResult:
    """
    Aggregate outcome of an update call.

    Truthiness follows `success`, so `if update_component_options(...)`
    reads like the plain boolean contract.
    """
    success: bool
    results: List[KeyResult] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @property
    def failures(self) -> List[KeyResult]:
        return [r for r in self.results if r.outcome is KeyOutcome.FAILED]

    def get(self, dictionary: str, key: str) -> Optional[KeyResult]:
        for result in self.results:
            if result.dictionary == dictionary and result.key == key:
                return result
        return None


def _write_dictionary(
    document: HostDocument,
    definition: ComponentDefinition,
    dictionary_name: str,
    attributes: Dict[str, Any],
    settings: EditorSettings,
) -> List[KeyResult]:
    """Coerce and write one dictionary's keys; failures are returned, not raised."""
    if settings.is_excluded(dictionary_name):
        logger.warning(f"Refusing to write reserved dictionary '{dictionary_name}'")
        return [
            KeyResult(dictionary_name, key, KeyOutcome.FAILED, value,
                      f"Dictionary '{dictionary_name}' is reserved")
            for key, value in attributes.items()
        ]

    dictionary = definition.attribute_dictionary(dictionary_name, create=True)
    results = []
    for key, new_value in attributes.items():
        current = dictionary.read(key)
        try:
            final_value = coerce_value(current.stored_type, new_value, document.length_unit)
        except CoercionError as e:
            logger.warning(
                f"Could not convert {new_value!r} for {dictionary_name}/{key} "
                f"(stored {current.stored_type.value}: {current.value!r}): {e}"
            )
            results.append(KeyResult(dictionary_name, key, KeyOutcome.FAILED, new_value, str(e)))
            continue

        if key in dictionary and current == TypedValue.of(final_value):
            results.append(KeyResult(dictionary_name, key, KeyOutcome.UNCHANGED, final_value))
            continue

        try:
            dictionary[key] = final_value
        except Exception as e:
            logger.exception(f"Failed to set attribute {dictionary_name}/{key} to {final_value!r}")
            results.append(KeyResult(dictionary_name, key, KeyOutcome.FAILED, new_value, str(e)))
            continue

        logger.debug(f"Set {dictionary_name}/{key}: {current.value!r} -> {final_value!r}")
        results.append(KeyResult(dictionary_name, key, KeyOutcome.UPDATED, final_value))
    return results


def _refresh_instances(document: HostDocument, definition: ComponentDefinition, settings: EditorSettings) -> None:
    """Redraw every instance, and let Dynamic Components recompute them."""
    for instance in definition.instances:
        instance.redraw_invalidated()

    dynamic_components = getattr(document, "dynamic_components", None)
    if not settings.refresh_dynamic_components or dynamic_components is None:
        return
    if not getattr(dynamic_components, "active", True):
        return
    for instance in definition.instances:
        dynamic_components.redraw(instance)


def update_component_options(
    document: HostDocument,
    definition: Optional[ComponentDefinition],
    request: Optional[UpdateRequest],
    settings: Optional[EditorSettings] = None,
) -> UpdateResult:
    """
    Write dialog edits back to a definition's attribute dictionaries.

    Missing dictionaries are created. The whole call is one operation in
    the document: committed when every key succeeds, aborted otherwise.
    After a commit every instance of the definition is redrawn.

    Args:
        document: Host document owning the definition
        definition: Definition to update
        request: Dictionary name -> key -> new value
        settings: Exclusion rules and operation name

    Returns:
        UpdateResult with one KeyResult per requested key
    """
    if definition is None or request is None:
        logger.warning("Nothing to update: missing definition or request")
        return UpdateResult(success=False)
    if not document.owns(definition):
        logger.warning(f"Refusing to update {definition.name}: not owned by the document")
        return UpdateResult(success=False)
    settings = settings or EditorSettings()

    operation_open = False
    try:
        document.start_operation(settings.operation_name)
        operation_open = True

        results: List[KeyResult] = []
        for dictionary_name, attributes in request.items():
            results.extend(_write_dictionary(document, definition, dictionary_name, attributes, settings))

        failures = [r for r in results if r.outcome is KeyOutcome.FAILED]
        if failures:
            operation_open = False
            document.abort_operation()
            logger.info(
                f"Aborted '{settings.operation_name}' on {definition.name}: "
                f"{len(failures)} of {len(results)} attributes failed"
            )
            return UpdateResult(success=False, results=results)

        document.commit_operation()
        operation_open = False
        logger.info(f"Committed '{settings.operation_name}' on {definition.name}: {len(results)} attributes")
    except Exception:
        logger.exception(f"Fatal error while updating {definition.name}")
        if operation_open:
            try:
                document.abort_operation()
            except Exception:
                logger.exception(f"Could not abort '{settings.operation_name}' on {definition.name}")
        return UpdateResult(success=False)

    try:
        _refresh_instances(document, definition, settings)
    except Exception:
        logger.exception(f"Changes to {definition.name} were committed but instances could not be refreshed")
    return UpdateResult(success=True, results=results)
