# backend/app/services/stats.py
"""
Descriptive statistics for a single numeric column.

The helpers take already-cleaned floats and return 0.0 for empty input
instead of NaN, so a column with no usable values still yields a complete
record. `summary_stats` does the cleaning itself.
"""
from __future__ import annotations

from typing import Any, List, Sequence

import numpy as np

from .coercion import clean_numeric_array
from ..schemas.dataset import SummaryStats


def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def median(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def std(values: Sequence[float]) -> float:
    """Population standard deviation (divisor n)."""
    if len(values) <= 1:
        return 0.0
    return float(np.std(values, ddof=0))


def min_value(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(min(values))


def max_value(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(max(values))


def quantile(values: Sequence[float], q: float) -> float:
    """Linear-interpolation quantile at `q` in [0, 1]."""
    if q < 0 or q > 1:
        raise ValueError("Quantile must be between 0 and 1")
    if len(values) == 0:
        return 0.0
    ordered = sorted(values)
    pos = (len(ordered) - 1) * q
    base = int(np.floor(pos))
    rest = pos - base
    if base + 1 < len(ordered):
        return ordered[base] + rest * (ordered[base + 1] - ordered[base])
    return ordered[base]


def summary_stats(raw_values: Sequence[Any]) -> SummaryStats:
    clean: List[float] = clean_numeric_array(raw_values)
    return SummaryStats(
        count=len(clean),
        mean=round(mean(clean), 2),
        median=round(median(clean), 2),
        std=round(std(clean), 2),
        min=round(min_value(clean), 2),
        max=round(max_value(clean), 2),
        q25=round(quantile(clean, 0.25), 2),
        q75=round(quantile(clean, 0.75), 2),
    )
