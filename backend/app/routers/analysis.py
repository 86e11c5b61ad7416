# backend/app/routers/analysis.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from ..core.deps import get_llm_client, get_store
from ..services.insights import INSIGHTS_KIND, generate_insights
from ..services.profiling import stats_for_columns
from ..services.store import DatasetStore
from ..schemas.dataset import (
    ColumnStatsRecord,
    CorrelationMatrix,
    CorrelationRequest,
    DatasetSummary,
    InsightsRequest,
    InsightsResponse,
    SummaryStatsRequest,
)
from ..utils.api_client import LLMClient, LLMRequestError

router = APIRouter(tags=["analysis"])


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------
def _load_dataset(store: DatasetStore, dataset_id: Optional[str]) -> DatasetSummary:
    if not dataset_id:
        raise HTTPException(status_code=400, detail="Dataset ID is required")
    summary = store.get_dataset(dataset_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Dataset not found")
    return summary


# -------------------------------------------------------------------
# STATS / CORRELATION
# -------------------------------------------------------------------
@router.post("/summary-stats", response_model=List[ColumnStatsRecord])
def summary_stats(req: SummaryStatsRequest, store: DatasetStore = Depends(get_store)) -> List[ColumnStatsRecord]:
    """
    Stored per-column stats, optionally for a subset of columns. Requested
    non-numeric columns get a placeholder record with null statistics.
    """
    summary = _load_dataset(store, req.csv_id)
    return [ColumnStatsRecord(**r) for r in stats_for_columns(summary, req.columns)]


@router.post("/correlation", response_model=CorrelationMatrix)
def correlation(req: CorrelationRequest, store: DatasetStore = Depends(get_store)) -> CorrelationMatrix:
    summary = _load_dataset(store, req.csv_id)
    if summary.correlation_matrix is None:
        raise HTTPException(
            status_code=400,
            detail="Correlation matrix not available. Need at least 2 numeric columns.",
        )
    return summary.correlation_matrix


# -------------------------------------------------------------------
# INSIGHTS
# -------------------------------------------------------------------
@router.post("/generate-insights", response_model=InsightsResponse)
def create_insights(
    req: InsightsRequest,
    store: DatasetStore = Depends(get_store),
    client: Optional[LLMClient] = Depends(get_llm_client),
) -> InsightsResponse:
    if not req.dataset_id:
        raise HTTPException(status_code=400, detail="Dataset ID is required")
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="OpenAI API key is not configured. Please add OPENAI_API_KEY to your environment variables.",
        )
    summary = _load_dataset(store, req.dataset_id)

    try:
        result = generate_insights(summary, client, store)
    except LLMRequestError as e:
        logger.error(f"Error generating insights for {summary.id}: {e}")
        if e.status_code == 401:
            raise HTTPException(
                status_code=401,
                detail="Invalid OpenAI API key. Please check your OPENAI_API_KEY environment variable.",
            )
        raise HTTPException(status_code=502, detail=str(e))

    return InsightsResponse(**result)


@router.get("/insights/{dataset_id}", response_model=InsightsResponse)
def get_insights(dataset_id: str, store: DatasetStore = Depends(get_store)) -> InsightsResponse:
    """Last insights generated for a dataset."""
    summary = _load_dataset(store, dataset_id)
    cached = store.get_analysis_result(summary.id, INSIGHTS_KIND)
    if cached is None:
        raise HTTPException(status_code=404, detail="No insights generated for this dataset yet")
    return InsightsResponse(**cached)
