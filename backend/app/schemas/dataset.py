# backend/app/schemas/dataset.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ============================================================
# ANALYSIS RESULTS
# ============================================================
class ColumnDescriptor(FrozenCamelModel):
    name: str
    type: str                       # "numeric" or the parser's type label
    missing_count: int
    missing_percent: float


class SummaryStats(FrozenCamelModel):
    count: int
    mean: float
    median: float
    std: float
    min: float
    max: float
    q25: float
    q75: float


class CorrelationMatrix(FrozenCamelModel):
    columns: List[str]
    matrix: List[List[float]]


class DatasetSummary(FrozenCamelModel):
    id: str
    file_name: str
    uploaded_at: str
    row_count: int                  # rows retained for analysis
    total_row_count: int            # rows in the uploaded file
    columns: List[ColumnDescriptor]
    summary_stats: Dict[str, SummaryStats]
    correlation_matrix: Optional[CorrelationMatrix] = None
    preview: List[Dict[str, Any]]

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        for c in self.columns:
            if c.name == name:
                return c
        return None


# ============================================================
# UPLOAD / LISTING
# ============================================================
class UploadResponse(CamelModel):
    id: str
    columns: List[ColumnDescriptor]
    preview: List[Dict[str, Any]]
    row_count: int
    total_rows: int


class DatasetListItem(CamelModel):
    id: str
    file_name: str
    uploaded_at: str
    row_count: int
    total_row_count: int


# ============================================================
# LOOKUPS
# ============================================================
class SummaryStatsRequest(CamelModel):
    csv_id: Optional[str] = None
    columns: Optional[List[str]] = None


class ColumnStatsRecord(CamelModel):
    column: str
    count: int
    type: Optional[str] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    q25: Optional[float] = None
    q75: Optional[float] = None


class CorrelationRequest(CamelModel):
    csv_id: Optional[str] = None


# ============================================================
# INSIGHTS
# ============================================================
class InsightsRequest(CamelModel):
    dataset_id: Optional[str] = None


class InsightsResponse(CamelModel):
    insights: str
    suggested_visualizations: List[str]
    generated_at: Optional[str] = None
