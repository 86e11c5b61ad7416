# backend/app/routers/ingest.py
from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from loguru import logger

from ..core.config import settings
from ..core.deps import get_store
from ..services.profiling import analyze_table, row_count
from ..services.store import DatasetStore
from ..schemas.dataset import DatasetListItem, DatasetSummary, UploadResponse
from ..utils.io import read_csv_bytes

router = APIRouter(tags=["ingest"])


def _is_csv(file: UploadFile) -> bool:
    return file.content_type == "text/csv" or (file.filename or "").lower().endswith(".csv")


@router.post("/upload-csv", response_model=UploadResponse)
async def upload_csv(
    file: UploadFile = File(...),
    store: DatasetStore = Depends(get_store),
) -> UploadResponse:
    """
    Parse an uploaded CSV, analyse it and store the summary under a new id.
    """
    if not _is_csv(file):
        raise HTTPException(status_code=400, detail="Only CSV files are allowed")

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File is too large. Maximum allowed size is {settings.max_upload_mb} MB.",
        )

    try:
        table = read_csv_bytes(content)
    except ValueError as e:
        logger.error(f"Error parsing '{file.filename}': {e}")
        raise HTTPException(status_code=400, detail=str(e))

    if row_count(table) == 0:
        raise HTTPException(status_code=400, detail="CSV contains no data rows")

    dataset_id = str(uuid.uuid4())
    summary = analyze_table(
        table,
        file_name=file.filename or "upload.csv",
        dataset_id=dataset_id,
        max_rows=settings.max_analysis_rows,
        preview_rows=settings.preview_rows,
    )
    store.save_dataset(dataset_id, summary)
    logger.info(
        f"Stored dataset {dataset_id} '{summary.file_name}': "
        f"{summary.row_count}/{summary.total_row_count} rows, "
        f"{len(summary.summary_stats)} numeric of {len(summary.columns)} columns"
    )

    return UploadResponse(
        id=dataset_id,
        columns=summary.columns,
        preview=summary.preview,
        row_count=summary.row_count,
        total_rows=summary.total_row_count,
    )


@router.get("/datasets", response_model=List[DatasetListItem])
def list_datasets(store: DatasetStore = Depends(get_store)) -> List[DatasetListItem]:
    """Return datasets currently stored."""
    return [
        DatasetListItem(
            id=s.id,
            file_name=s.file_name,
            uploaded_at=s.uploaded_at,
            row_count=s.row_count,
            total_row_count=s.total_row_count,
        )
        for s in store.list_datasets()
    ]


@router.get("/datasets/{dataset_id}", response_model=DatasetSummary)
def get_dataset(dataset_id: str, store: DatasetStore = Depends(get_store)) -> DatasetSummary:
    summary = store.get_dataset(dataset_id)
    if summary is None:
        raise HTTPException(status_code=404, detail="Dataset not found")
    return summary
