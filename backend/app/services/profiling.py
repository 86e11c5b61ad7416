# backend/app/services/profiling.py
"""
Dataset analysis for uploaded CSV files.

- Normalises the parsed table to column-oriented lists.
- Caps the working set to the first N rows (original count is kept).
- Classifies columns, computes per-column stats and the correlation matrix.
- Returns an immutable DatasetSummary (validated by Pydantic).
"""
from __future__ import annotations

import math
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd
from loguru import logger

from .columns import describe_column, is_numeric_column, source_type_label
from .correlation import correlation_matrix
from .stats import summary_stats
from ..schemas.dataset import ColumnDescriptor, CorrelationMatrix, DatasetSummary, SummaryStats

MAX_ANALYSIS_ROWS = 1000
PREVIEW_ROWS = 10

Table = Dict[str, List[Any]]


def _to_py(obj: Any) -> Any:
    """Convert numpy scalars to plain Python and NaN to None."""
    if isinstance(obj, np.generic):
        obj = obj.item()
    if isinstance(obj, float) and math.isnan(obj):
        return None
    return obj


def _json_safe(obj: Any) -> Any:
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


def normalize_table(data: Any) -> Table:
    """
    Column-oriented view of `data`: a DataFrame, a mapping of column name to
    values, or a sequence of row dicts. Header names are stripped; every
    column is padded with None to the table's row count.
    """
    if isinstance(data, pd.DataFrame):
        table = {str(col).strip(): [_to_py(v) for v in data[col].tolist()] for col in data.columns}
    elif isinstance(data, Mapping):
        table = {str(col).strip(): [_to_py(v) for v in values] for col, values in data.items()}
    else:
        rows = list(data)
        headers: List[str] = []
        for row in rows:
            for key in row:
                if key not in headers:
                    headers.append(key)
        table = {str(h).strip(): [_to_py(row.get(h)) for row in rows] for h in headers}

    n_rows = max((len(v) for v in table.values()), default=0)
    for values in table.values():
        values.extend([None] * (n_rows - len(values)))
    return table


def row_count(table: Table) -> int:
    return max((len(v) for v in table.values()), default=0)


def cap_rows(table: Table, max_rows: int = MAX_ANALYSIS_ROWS) -> Table:
    return {col: values[:max_rows] for col, values in table.items()}


def build_preview(table: Table, n: int = PREVIEW_ROWS) -> List[Dict[str, Any]]:
    """First N rows as records, JSON-safe."""
    n = max(0, int(n))
    rows = min(n, row_count(table))
    return [
        {col: _json_safe(values[i]) for col, values in table.items()}
        for i in range(rows)
    ]


def analyze_table(
    data: Any,
    file_name: str,
    dataset_id: Optional[str] = None,
    uploaded_at: Optional[str] = None,
    max_rows: int = MAX_ANALYSIS_ROWS,
    preview_rows: int = PREVIEW_ROWS,
) -> DatasetSummary:
    full = normalize_table(data)
    total_rows = row_count(full)
    table = cap_rows(full, max_rows) if total_rows > max_rows else full
    rows = row_count(table)
    if total_rows > rows:
        logger.info(f"Capping '{file_name}' from {total_rows} to {rows} rows for analysis")

    columns: List[ColumnDescriptor] = []
    stats: Dict[str, SummaryStats] = {}
    numeric_cols: List[str] = []

    for name, values in table.items():
        numeric = is_numeric_column(values)
        descriptor = describe_column(name, values, numeric=numeric)

        if numeric:
            try:
                stats[name] = summary_stats(values)
                numeric_cols.append(name)
                logger.debug(
                    f"Column '{name}': numeric, mean={stats[name].mean}, "
                    f"min={stats[name].min}, max={stats[name].max}"
                )
            except Exception as e:
                # a column typed "numeric" always has stats
                logger.error(f"Failed to compute stats for column '{name}': {e}")
                descriptor = descriptor.model_copy(update={"type": source_type_label(values)})
        else:
            logger.debug(f"Column '{name}': skipping non-numeric ({descriptor.type})")

        columns.append(descriptor)

    corr: Optional[CorrelationMatrix] = None
    if len(numeric_cols) >= 2:
        corr = correlation_matrix({name: table[name] for name in numeric_cols})
    else:
        logger.info(f"Not enough numeric columns for correlation in '{file_name}' ({len(numeric_cols)})")

    return DatasetSummary(
        id=dataset_id or str(uuid.uuid4()),
        file_name=file_name,
        uploaded_at=uploaded_at or datetime.now(timezone.utc).isoformat(),
        row_count=rows,
        total_row_count=total_rows,
        columns=columns,
        summary_stats=stats,
        correlation_matrix=corr,
        preview=build_preview(table, preview_rows),
    )


def stats_for_columns(summary: DatasetSummary, requested: Optional[Sequence[str]] = None) -> List[Dict[str, Any]]:
    """
    Stored stats as `[{column, ...}]`. When columns are requested, numeric ones
    come first, then null-filled placeholders for the non-numeric ones.
    """
    if not requested:
        return [
            {"column": col, "type": "numeric", **s.model_dump()}
            for col, s in summary.summary_stats.items()
        ]

    records = [
        {"column": col, "type": "numeric", **summary.summary_stats[col].model_dump()}
        for col in requested
        if col in summary.summary_stats
    ]
    for col in requested:
        if col in summary.summary_stats:
            continue
        descriptor = summary.column(col)
        records.append({
            "column": col,
            "count": summary.row_count,
            "type": descriptor.type if descriptor else "string",
        })
    return records
