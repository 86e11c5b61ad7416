# backend/app/services/columns.py
from __future__ import annotations

from typing import Any, Sequence

import pandas as pd

from .coercion import clean_numeric_array, is_missing
from ..schemas.dataset import ColumnDescriptor

NUMERIC_TYPE = "numeric"
NUMERIC_THRESHOLD = 0.5


def missing_count(values: Sequence[Any]) -> int:
    """Cells that are absent. Present-but-unparsable text does not count."""
    return sum(1 for v in values if is_missing(v))


def missing_percent(values: Sequence[Any]) -> float:
    if not values:
        return 0.0
    return round(missing_count(values) / len(values) * 100.0, 2)


def is_numeric_column(values: Sequence[Any]) -> bool:
    """
    Majority vote: numeric when at least half of the non-missing cells
    coerce to a finite number. A fully empty column is never numeric.
    """
    non_missing = [v for v in values if not is_missing(v)]
    if not non_missing:
        return False
    return len(clean_numeric_array(non_missing)) / len(non_missing) >= NUMERIC_THRESHOLD


def source_type_label(values: Sequence[Any]) -> str:
    """Type label as the parser sees it ("integer", "string", "mixed", ...)."""
    return pd.api.types.infer_dtype(list(values), skipna=True)


def describe_column(name: str, values: Sequence[Any], numeric: bool | None = None) -> ColumnDescriptor:
    if numeric is None:
        numeric = is_numeric_column(values)
    return ColumnDescriptor(
        name=name,
        type=NUMERIC_TYPE if numeric else source_type_label(values),
        missing_count=missing_count(values),
        missing_percent=missing_percent(values),
    )
