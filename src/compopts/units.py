"""
Length quantities for component attributes.

The host stores every length in inches, whatever the display units of the
document. A `Length` is a float that remembers it is a distance, so the
writer can tell a length attribute apart from a plain float one.

Parsing accepts what a user types into a dialog field:
    10          (document units)
    10cm  10 mm  2.5m  1km
    12"   12in  3'  3ft  2yd
    1'6"  1' 6 1/2"  3/4"
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Optional


class LengthParseError(ValueError):
    """Raised when text cannot be read as a length."""
    pass


class Unit(Enum):
    """Length units understood by the parser, valued by their suffix."""
    INCH = "in"
    FOOT = "ft"
    YARD = "yd"
    MILLIMETER = "mm"
    CENTIMETER = "cm"
    METER = "m"
    KILOMETER = "km"


INCHES_PER_UNIT: Dict[Unit, float] = {
    Unit.INCH: 1.0,
    Unit.FOOT: 12.0,
    Unit.YARD: 36.0,
    Unit.MILLIMETER: 1.0 / 25.4,
    Unit.CENTIMETER: 1.0 / 2.54,
    Unit.METER: 100.0 / 2.54,
    Unit.KILOMETER: 100000.0 / 2.54,
}

_SUFFIXES: Dict[str, Unit] = {
    '"': Unit.INCH,
    "in": Unit.INCH,
    "inch": Unit.INCH,
    "inches": Unit.INCH,
    "'": Unit.FOOT,
    "ft": Unit.FOOT,
    "foot": Unit.FOOT,
    "feet": Unit.FOOT,
    "yd": Unit.YARD,
    "yard": Unit.YARD,
    "yards": Unit.YARD,
    "mm": Unit.MILLIMETER,
    "cm": Unit.CENTIMETER,
    "m": Unit.METER,
    "km": Unit.KILOMETER,
}

# "1 1/2", "3/4", "1.5", "-.5"
_NUMBER = r"[-+]?(?:\d+\s+\d+/\d+|\d+/\d+|\d+(?:\.\d*)?|\.\d+)"
_QUANTITY_RE = re.compile(rf"^\s*({_NUMBER})\s*([a-zA-Z\"']*)\s*$")
_FEET_INCHES_RE = re.compile(rf"^\s*({_NUMBER})\s*(?:'|ft)\s*({_NUMBER})\s*(?:\"|in)?\s*$")


class Length(float):
    """A distance in inches."""

    @classmethod
    def from_unit(cls, value: float, unit: Unit) -> Length:
        return cls(value * INCHES_PER_UNIT[unit])

    def to_unit(self, unit: Unit) -> float:
        return float(self) / INCHES_PER_UNIT[unit]

    def __repr__(self) -> str:
        return f"Length({float(self)!r})"


def _number(text: str) -> float:
    """Read a decimal or (mixed) fraction."""
    text = text.strip()
    sign = -1.0 if text.startswith("-") else 1.0
    text = text.lstrip("+-")
    if "/" not in text:
        return sign * float(text)

    whole = 0.0
    parts = text.split()
    if len(parts) == 2:
        whole = float(parts[0])
        text = parts[1]
    numerator, denominator = text.split("/")
    if float(denominator) == 0:
        raise LengthParseError(f"Zero denominator in '{text}'")
    return sign * (whole + float(numerator) / float(denominator))


def parse_length(text: str, default_unit: Unit = Unit.INCH) -> Length:
    """
    Parse user text into a Length.

    Args:
        text: Quantity with an optional unit suffix
        default_unit: Unit applied when the text carries none

    Returns:
        Length in inches

    Raises:
        LengthParseError: If the text is not a length
    """
    if not isinstance(text, str):
        raise LengthParseError(f"Expected text, got {type(text).__name__}")

    compound = _FEET_INCHES_RE.match(text)
    if compound:
        feet = _number(compound.group(1))
        inches = _number(compound.group(2))
        # 1'6" is one and a half feet, -1'6" is minus one and a half
        if compound.group(1).strip().startswith("-"):
            inches = -inches
        return Length(feet * 12.0 + inches)

    match = _QUANTITY_RE.match(text)
    if not match:
        raise LengthParseError(f"Cannot parse '{text}' as a length")

    suffix = match.group(2).lower()
    unit: Optional[Unit] = default_unit if suffix == "" else _SUFFIXES.get(suffix)
    if unit is None:
        raise LengthParseError(f"Unknown length unit '{match.group(2)}' in '{text}'")
    return Length.from_unit(_number(match.group(1)), unit)


def to_length(value, default_unit: Unit = Unit.INCH) -> Length:
    """
    Convert a UI value to a Length.

    Numbers are taken as inches, text goes through `parse_length`.
    Booleans and anything else are rejected.
    """
    if isinstance(value, Length):
        return value
    if isinstance(value, bool):
        raise LengthParseError(f"Cannot convert boolean {value!r} to a length")
    if isinstance(value, (int, float)):
        return Length(value)
    return parse_length(value, default_unit)
