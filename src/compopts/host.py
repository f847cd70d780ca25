"""
Host document seam.

The editor never reaches for global application state. Every call gets
an explicit document handle implementing `HostDocument`:

    selection              ordered list of selected entities
    length_unit            unit for unitless length text
    dynamic_components     optional subsystem with redraw(instance)
    owns(definition)       operations roll back this definition
    start_operation(name)  open one undoable operation
    commit_operation()     keep the changes
    abort_operation()      roll them back

`MemoryDocument` is a complete in-memory implementation. Its operations
snapshot the attribute dictionaries of every definition and restore them
on abort, which is all the writer needs from an undo engine.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .model import ComponentDefinition, ComponentInstance, Entity
from .units import Unit

logger = logging.getLogger(__name__)


class TransactionError(RuntimeError):
    """Raised on operation misuse (nesting, commit without start)."""
    pass


class HostDocument(ABC):
    """Contract between the editor and the host application."""

    selection: List[Optional[Entity]]
    length_unit: Unit
    dynamic_components: Optional[Any]

    @abstractmethod
    def owns(self, definition: ComponentDefinition) -> bool:
        """True if the document's operations cover this definition."""
        ...

    @abstractmethod
    def start_operation(self, name: str) -> None:
        ...

    @abstractmethod
    def commit_operation(self) -> None:
        ...

    @abstractmethod
    def abort_operation(self) -> None:
        ...


class DynamicComponents:
    """
    Stand-in for the host's Dynamic Components subsystem.

    Records which instances it was asked to redraw. `active` mirrors
    the host switch that turns the extension off.
    """

    def __init__(self, active: bool = True):
        self.active = active
        self.redrawn: List[Entity] = []

    def redraw(self, instance: Entity) -> None:
        self.redrawn.append(instance)


class MemoryDocument(HostDocument):
    """
    In-memory host document.

    Properties:
        definitions: Component definitions owned by the document
        selection: Current selection, first element first
        length_unit: Unit applied to unitless length text
        dynamic_components: Optional DynamicComponents subsystem
        history: Names of committed operations, oldest first
    """

    def __init__(
        self,
        definitions: Optional[List[ComponentDefinition]] = None,
        length_unit: Unit = Unit.INCH,
        dynamic_components: Optional[DynamicComponents] = None,
    ):
        self.definitions: List[ComponentDefinition] = list(definitions or [])
        self.selection: List[Optional[Entity]] = []
        self.length_unit = length_unit
        self.dynamic_components = dynamic_components
        self.history: List[str] = []
        self._operation: Optional[str] = None
        self._snapshot: Dict[int, Dict[str, Dict[str, Any]]] = {}

    @property
    def operation_open(self) -> bool:
        return self._operation is not None

    def add_definition(self, definition: ComponentDefinition) -> ComponentDefinition:
        self.definitions.append(definition)
        return definition

    def owns(self, definition: ComponentDefinition) -> bool:
        return definition in self.definitions

    def get_definition(self, name: str) -> Optional[ComponentDefinition]:
        for definition in self.definitions:
            if definition.name == name:
                return definition
        return None

    def select(self, *entities: Optional[Entity]) -> None:
        """Replace the selection, adopting definitions of selected instances."""
        for entity in entities:
            if isinstance(entity, ComponentInstance) and entity.definition is not None:
                if entity.definition not in self.definitions:
                    self.definitions.append(entity.definition)
        self.selection = list(entities)

    def start_operation(self, name: str) -> None:
        if self._operation is not None:
            raise TransactionError(f"Operation '{self._operation}' is still open")
        self._snapshot = {id(d): d.snapshot() for d in self.definitions}
        self._operation = name
        logger.debug(f"Started operation '{name}'")

    def commit_operation(self) -> None:
        if self._operation is None:
            raise TransactionError("No operation to commit")
        self.history.append(self._operation)
        logger.debug(f"Committed operation '{self._operation}'")
        self._operation = None
        self._snapshot = {}

    def abort_operation(self) -> None:
        if self._operation is None:
            raise TransactionError("No operation to abort")
        for definition in self.definitions:
            snapshot = self._snapshot.get(id(definition))
            if snapshot is not None:
                definition.restore(snapshot)
        logger.debug(f"Aborted operation '{self._operation}'")
        self._operation = None
        self._snapshot = {}
