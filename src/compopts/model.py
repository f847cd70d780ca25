"""
Core Component Attribute Objects

Defines the data structures the editor reads and writes:
    - StoredType (closed tag for an attribute's storage type)
    - TypedValue (a value read together with its tag)
    - AttributeDictionary (named key/value store)
    - ComponentDefinition (reusable component type)
    - ComponentInstance / Entity (placed things in a selection)

ARCHITECTURAL RULE:
    These objects model host storage only.
    They know nothing about dialogs, payloads or coercion.
    Type decisions are made on the StoredType tag, never by
    inspecting Python types outside `StoredType.of`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .units import Length


META_PREFIX = "_"


class StoredType(Enum):
    """
    Storage type of an attribute value.

    The tag is derived when a value is read. Coercion of incoming
    UI values is a switch over this closed set.
    """

    LENGTH = "length"
    FLOAT = "float"
    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"
    UNSET = "unset"

    @classmethod
    def of(cls, value: Any) -> StoredType:
        """
        Classify a stored value.

        Order matters: bool is an int subclass and Length a float subclass.

        Raises:
            TypeError: If the value is not a supported scalar
        """
        if value is None:
            return cls.UNSET
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, Length):
            return cls.LENGTH
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.STRING
        raise TypeError(f"Unsupported attribute value type: {type(value).__name__}")


@dataclass(frozen=True)
class TypedValue:
    """An attribute value and its storage tag."""
    value: Any
    stored_type: StoredType

    @classmethod
    def of(cls, value: Any) -> TypedValue:
        return cls(value=value, stored_type=StoredType.of(value))


def is_meta_key(key: str) -> bool:
    """
    True for meta-attribute keys such as `_lenx_label`.

    A lone `_` is a primary key: the meta namespace needs at least
    one character after the prefix.
    """
    return key.startswith(META_PREFIX) and len(key) > 1


class AttributeDictionary:
    """
    Named mapping from string key to a scalar value.

    Insertion order is preserved. Only values `StoredType.of`
    accepts can be stored.
    """

    def __init__(self, name: str, values: Optional[Dict[str, Any]] = None):
        self.name = name
        self._values: Dict[str, Any] = {}
        for key, value in (values or {}).items():
            self[key] = value

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str) or key == "":
            raise TypeError(f"Attribute keys must be non-empty strings, got {key!r}")
        if value is None:
            raise TypeError(f"Cannot store None for {self.name}/{key}")
        StoredType.of(value)
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AttributeDictionary({self.name!r}, {self._values!r})"

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._values.items())

    def read(self, key: str) -> TypedValue:
        """Read a value with its storage tag (UNSET when absent)."""
        return TypedValue.of(self._values.get(key))

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._values)

    def restore(self, values: Dict[str, Any]) -> None:
        self._values = dict(values)


@dataclass
class Entity:
    """
    Anything that can sit in a selection.

    Edges, faces and groups are all plain entities as far as
    the editor is concerned.
    """
    name: str = ""


@dataclass(eq=False)
class ComponentInstance(Entity):
    """
    A placed copy of a component definition.

    Properties:
        definition: The shared definition this instance places
        redraw_count: Times the host was asked to redraw this instance
    """
    definition: Optional[ComponentDefinition] = field(default=None, repr=False)
    redraw_count: int = 0

    def redraw_invalidated(self) -> None:
        self.redraw_count += 1


@dataclass(eq=False)
class ComponentDefinition:
    """
    Shared template for a reusable component.

    Properties:
        name:
            Definition name as shown by the host (e.g. "Cabinet")

        dictionaries:
            Attribute dictionaries keyed by unique name, in creation order

        instances:
            Placed instances of this definition

    Instances are added with `place()`, which keeps the back
    reference from instance to definition consistent.
    """

    name: str
    dictionaries: Dict[str, AttributeDictionary] = field(default_factory=dict)
    instances: List[ComponentInstance] = field(default_factory=list)

    @property
    def attribute_dictionaries(self) -> List[AttributeDictionary]:
        return list(self.dictionaries.values())

    def attribute_dictionary(self, name: str, create: bool = False) -> Optional[AttributeDictionary]:
        """
        Retrieve a dictionary by name.

        Args:
            name: Dictionary name
            create: Create an empty dictionary when absent

        Returns:
            AttributeDictionary, or None if absent and not created
        """
        dictionary = self.dictionaries.get(name)
        if dictionary is None and create:
            dictionary = AttributeDictionary(name)
            self.dictionaries[name] = dictionary
        return dictionary

    def get_attribute(self, dictionary_name: str, key: str, default: Any = None) -> Any:
        dictionary = self.dictionaries.get(dictionary_name)
        if dictionary is None:
            return default
        return dictionary.get(key, default)

    def set_attribute(self, dictionary_name: str, key: str, value: Any) -> None:
        self.attribute_dictionary(dictionary_name, create=True)[key] = value

    def place(self, name: str = "") -> ComponentInstance:
        instance = ComponentInstance(name=name or self.name, definition=self)
        self.instances.append(instance)
        return instance

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        return {name: d.snapshot() for name, d in self.dictionaries.items()}

    def restore(self, snapshot: Dict[str, Dict[str, Any]]) -> None:
        """Put the dictionaries back exactly as captured by `snapshot()`."""
        restored: Dict[str, AttributeDictionary] = {}
        for name, values in snapshot.items():
            dictionary = self.dictionaries.get(name)
            if dictionary is None:
                dictionary = AttributeDictionary(name)
            dictionary.restore(values)
            restored[name] = dictionary
        self.dictionaries = restored
