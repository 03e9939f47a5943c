"""Conversion of raw text fields into calculator inputs.

A calculator reads its inputs from text fields typed by the user. A field that
is left blank or that cannot be read as a number is *missing*: the functions
below return None for it and the calculator then skips the calculation.
"""
import math
from enum import Enum
from typing import TypeVar
from hvacalc import Quantity

Q_ = Quantity
E = TypeVar('E', bound=Enum)

Text = str | float | int | None


def parse_number(text: Text) -> float | None:
    """Returns the number in `text`, or None if `text` is blank, not a number,
    or not finite. Numbers that are already given as int or float are passed
    through.
    """
    if text is None or isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        text = text.strip().replace(',', '.')
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def parse_quantity(text: Text, unit: str) -> Quantity | None:
    """Returns the number in `text` as a quantity expressed in `unit`, or
    None if the field is missing (see `parse_number`).
    """
    value = parse_number(text)
    if value is None:
        return None
    return Q_(value, unit)


def parse_choice(text: str | E | None, enum_type: type[E]) -> E | None:
    """Returns the member of `enum_type` selected with `text`.

    The selection is matched against the member names, ignoring case and
    treating hyphens and spaces as underscores, so that 'hot-humid' selects
    `ClimateZone.HOT_HUMID`. Returns None if nothing is selected or the
    selection is unknown.
    """
    if text is None:
        return None
    if isinstance(text, enum_type):
        return text
    if not isinstance(text, str):
        return None
    name = text.strip().upper().replace('-', '_').replace(' ', '_')
    if not name:
        return None
    return enum_type.__members__.get(name)


def is_missing(*values: object) -> bool:
    """Returns True if any of the required `values` is None."""
    return any(v is None for v in values)
