# backend/app/services/correlation.py
"""
Pairwise Pearson correlation with pairwise-complete-case alignment.

Each pair of columns is correlated over the rows where *both* cells coerce
to a finite number; a row that is invalid in one column is dropped for the
pairs involving that column only.
"""
from __future__ import annotations

import math
from typing import Any, List, Mapping, Sequence, Tuple

import numpy as np

from .coercion import coerce_numeric
from ..schemas.dataset import CorrelationMatrix


def paired_values(x_raw: Sequence[Any], y_raw: Sequence[Any]) -> Tuple[List[float], List[float]]:
    xs: List[float] = []
    ys: List[float] = []
    for x, y in zip(x_raw, y_raw):
        nx, ny = coerce_numeric(x), coerce_numeric(y)
        if nx is None or ny is None:
            continue
        xs.append(nx)
        ys.append(ny)
    return xs, ys


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """Sum-based Pearson r; 0.0 for empty, mismatched or zero-variance input."""
    if len(x) != len(y) or len(x) == 0:
        return 0.0
    xa = np.asarray(x, dtype=float)
    ya = np.asarray(y, dtype=float)
    n = len(xa)
    if np.ptp(xa) == 0 or np.ptp(ya) == 0:
        return 0.0

    sum_x, sum_y = xa.sum(), ya.sum()
    numerator = n * (xa * ya).sum() - sum_x * sum_y
    # float error can leave a constant series with a tiny negative spread
    spread = (n * (xa * xa).sum() - sum_x ** 2) * (n * (ya * ya).sum() - sum_y ** 2)
    if not spread > 0:
        return 0.0
    r = float(numerator / math.sqrt(spread))
    return r if math.isfinite(r) else 0.0


def correlation_matrix(columns: Mapping[str, Sequence[Any]]) -> CorrelationMatrix:
    names = list(columns.keys())
    n = len(names)
    if n < 2:
        raise ValueError("Correlation matrix needs at least 2 numeric columns")

    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        matrix[i][i] = 1.0
        for j in range(i + 1, n):
            xs, ys = paired_values(columns[names[i]], columns[names[j]])
            r = round(pearson(xs, ys), 3)
            matrix[i][j] = r
            matrix[j][i] = r

    return CorrelationMatrix(columns=names, matrix=matrix)
