"""
Coercion of dialog values into an attribute's stored type.

The dialog sends text, numbers and booleans without knowing how the host
stores each attribute. The stored type of the *current* value decides the
result type, so an edit never changes an attribute's storage type:

    LENGTH   number or "10cm"-style text -> Length
    FLOAT    number or numeric text -> float
    INTEGER  True/False -> 1/0, number or numeric text -> int (truncated)
    STRING   True/False -> "true"/"false", anything else -> str
    UNSET    as STRING
    BOOLEAN  text compared to "true", anything else by truthiness

Dynamic Components keep checkbox state in INTEGER attributes, which is
why booleans map onto 1 and 0 there.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict

from .model import StoredType
from .units import Length, LengthParseError, Unit, to_length


class CoercionError(ValueError):
    """Raised when a value cannot take an attribute's stored type."""
    pass


_PLAIN_NUMBER_RE = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?\s*$")


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise CoercionError(f"Cannot convert boolean {value!r} to a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and _PLAIN_NUMBER_RE.match(value):
        return float(value)
    raise CoercionError(f"Cannot convert {value!r} to a number")


def coerce_length(value: Any, default_unit: Unit = Unit.INCH) -> Length:
    """
    Coerce to Length, falling back to a plain number in inches.

    Raises:
        CoercionError: If neither the length parser nor the number
            fallback accepts the value
    """
    try:
        return to_length(value, default_unit)
    except LengthParseError as e:
        try:
            return Length(_to_float(value))
        except CoercionError:
            raise CoercionError(f"Cannot convert {value!r} to a length: {e}")


def coerce_float(value: Any) -> float:
    return _to_float(value)


def coerce_integer(value: Any) -> int:
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise CoercionError(f"Cannot convert {value!r} to an integer")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return coerce_integer(_to_float(value))
    raise CoercionError(f"Cannot convert {value!r} to an integer")


def coerce_string(value: Any) -> str:
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return ""
    return str(value)


def coerce_boolean(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


_COERCERS: Dict[StoredType, Callable[[Any], Any]] = {
    StoredType.FLOAT: coerce_float,
    StoredType.INTEGER: coerce_integer,
    StoredType.STRING: coerce_string,
    StoredType.UNSET: coerce_string,
    StoredType.BOOLEAN: coerce_boolean,
}


def coerce_value(stored_type: StoredType, value: Any, default_unit: Unit = Unit.INCH) -> Any:
    """
    Convert a dialog value to the given stored type.

    Args:
        stored_type: Tag of the attribute's current value
        value: Value from the dialog (text, number or boolean)
        default_unit: Unit for unitless length text

    Returns:
        Value of the type `stored_type` describes (STRING for UNSET)

    Raises:
        CoercionError: If the value cannot be converted
    """
    if stored_type is StoredType.LENGTH:
        return coerce_length(value, default_unit)
    return _COERCERS[stored_type](value)
