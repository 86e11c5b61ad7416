# backend/app/services/coercion.py
"""
Cell value coercion.

Every raw cell coming out of the CSV parser is one of: missing, a number,
a boolean, or free text. Analysis code never looks at raw cells directly;
it goes through `coerce_numeric` / `clean_numeric_array` so that malformed
input degrades to "invalid" instead of raising.
"""
from __future__ import annotations

import math
import numbers
import re
from enum import Enum
from typing import Any, Iterable, List, Optional

import numpy as np


class CellKind(str, Enum):
    MISSING = "missing"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"


# Longest numeric prefix, e.g. "12.5kg" -> 12.5, "  -3e2x" -> -300
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)

# Whole-field numeric literal used when typing freshly parsed CSV cells
_NUMERIC_LITERAL = re.compile(r"^\s*-?(?:\d+\.?|\.\d+|\d+\.\d+)(?:[eE][-+]?\d+)?\s*$")
_INT_LITERAL = re.compile(r"^\s*-?\d+\s*$")
_BOOLEAN_LITERALS = {"true": True, "TRUE": True, "false": False, "FALSE": False}


def cell_kind(value: Any) -> CellKind:
    """Classify a raw cell into the tagged union used throughout analysis."""
    if value is None:
        return CellKind.MISSING
    if isinstance(value, str):
        return CellKind.MISSING if value == "" else CellKind.TEXT
    if isinstance(value, (bool, np.bool_)):
        return CellKind.BOOLEAN
    if isinstance(value, numbers.Real):
        # NaN is how pandas spells "absent"
        if isinstance(value, float) and math.isnan(value):
            return CellKind.MISSING
        return CellKind.NUMBER
    return CellKind.TEXT


def is_missing(value: Any) -> bool:
    return cell_kind(value) is CellKind.MISSING


def parse_float_prefix(text: str) -> Optional[float]:
    """Parse the leading numeric part of `text`; None if there is none."""
    match = _FLOAT_PREFIX.match(text.lstrip())
    if not match:
        return None
    literal = match.group(0)
    if literal.lstrip("+-") == "Infinity":
        return -math.inf if literal.startswith("-") else math.inf
    return float(literal)


def coerce_numeric(value: Any) -> Optional[float]:
    """Return a finite float for `value`, or None if it is missing or invalid."""
    kind = cell_kind(value)
    if kind is CellKind.NUMBER:
        try:
            num = float(value)
        except OverflowError:
            # ints wider than a double
            return None
    elif kind is CellKind.TEXT:
        num = parse_float_prefix(str(value))
        if num is None:
            return None
    else:
        return None
    return num if math.isfinite(num) else None


def clean_numeric_array(values: Iterable[Any]) -> List[float]:
    """Coerce every cell and keep only the valid numbers, in order."""
    cleaned: List[float] = []
    for v in values:
        num = coerce_numeric(v)
        if num is not None:
            cleaned.append(num)
    return cleaned


def parse_cell(text: Optional[str]) -> Any:
    """Give a raw CSV field a Python type: None, int, float, bool or str."""
    if text is None or text == "":
        return None
    if _NUMERIC_LITERAL.match(text):
        if _INT_LITERAL.match(text):
            return int(text)
        return float(text)
    if text in _BOOLEAN_LITERALS:
        return _BOOLEAN_LITERALS[text]
    return text
