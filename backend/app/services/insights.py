# backend/app/services/insights.py
"""
Natural-language insights for an analysed dataset.

The prompt is built only from the stored DatasetSummary; the raw rows are
never sent to the language model.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from loguru import logger

from .store import DatasetStore
from ..schemas.dataset import DatasetSummary
from ..utils.api_client import LLMClient

INSIGHTS_KIND = "insights"

SYSTEM_PROMPT = (
    "You are a professional data analyst who provides clear, actionable "
    "insights from data summaries."
)

DEFAULT_VISUALIZATIONS = [
    "Histogram of key numeric variables",
    "Scatter plot for correlations",
]

_VIZ_KEYWORDS = ("visualization", "chart", "plot", "graph")


def build_insights_prompt(summary: DatasetSummary) -> str:
    column_list = ", ".join(f"{c.name} ({c.type})" for c in summary.columns)
    missing = ", ".join(
        f"{c.name}: {c.missing_count} ({c.missing_percent}%)"
        for c in summary.columns
        if c.missing_count > 0
    )
    stats_text = "\n".join(
        f"{col}: mean={s.mean}, median={s.median}, std={s.std}, min={s.min}, max={s.max}"
        for col, s in summary.summary_stats.items()
    )
    if summary.correlation_matrix is not None:
        correlation_text = f"Available for {len(summary.correlation_matrix.columns)} numeric columns"
    else:
        correlation_text = "Not available (insufficient numeric columns)"

    return f"""You are an expert data analyst. Analyze this dataset and provide actionable insights.

Dataset: {summary.file_name}
Total Rows: {summary.total_row_count} (analyzed: {summary.row_count})
Columns ({len(summary.columns)}): {column_list}

Missing Values:
{missing or 'None'}

Summary Statistics for Numeric Columns:
{stats_text or 'No numeric columns'}

Correlation Matrix: {correlation_text}

Based on this data summary:
1. Identify 3-4 key insights or patterns in the data
2. Suggest 2-3 specific visualizations that would be most valuable
3. Highlight any data quality issues or anomalies
4. Provide actionable recommendations for further analysis

Be specific and reference actual column names and values from the data."""


def extract_visualizations(text: str, limit: int = 4) -> List[str]:
    found = [
        line for line in text.split("\n")
        if any(k in line.lower() for k in _VIZ_KEYWORDS)
    ][:limit]
    return found or list(DEFAULT_VISUALIZATIONS)


def generate_insights(summary: DatasetSummary, client: LLMClient, store: DatasetStore) -> Dict[str, Any]:
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_insights_prompt(summary)},
    ]
    logger.info(f"Requesting insights for dataset {summary.id} ({summary.file_name})")
    text = client.complete(messages) or "No insights generated"

    result = {
        "insights": text,
        "suggestedVisualizations": extract_visualizations(text),
        "generatedAt": datetime.now(timezone.utc).isoformat(),
    }
    store.save_analysis_result(summary.id, INSIGHTS_KIND, result)
    return result
