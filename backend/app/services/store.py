# backend/app/services/store.py

import os
import json
from abc import ABC, abstractmethod
from threading import RLock
from typing import Dict, Any, List, Optional

from loguru import logger

from ..schemas.dataset import DatasetSummary


class DatasetStore(ABC):
    """
    Key-value store for analysed datasets and derived results.

    Summaries are written once per upload and never revised; there is no
    eviction or TTL.
    """

    @abstractmethod
    def save_dataset(self, dataset_id: str, summary: DatasetSummary) -> None: ...

    @abstractmethod
    def get_dataset(self, dataset_id: str) -> Optional[DatasetSummary]: ...

    @abstractmethod
    def list_datasets(self) -> List[DatasetSummary]: ...

    @abstractmethod
    def save_analysis_result(self, dataset_id: str, kind: str, result: Dict[str, Any]) -> None: ...

    @abstractmethod
    def get_analysis_result(self, dataset_id: str, kind: str) -> Optional[Dict[str, Any]]: ...


class MemoryDatasetStore(DatasetStore):
    """Process-lifetime storage."""

    def __init__(self):
        self._lock = RLock()
        self._datasets: Dict[str, DatasetSummary] = {}
        self._results: Dict[str, Dict[str, Any]] = {}

    def save_dataset(self, dataset_id: str, summary: DatasetSummary) -> None:
        with self._lock:
            self._datasets[dataset_id] = summary

    def get_dataset(self, dataset_id: str) -> Optional[DatasetSummary]:
        with self._lock:
            return self._datasets.get(dataset_id)

    def list_datasets(self) -> List[DatasetSummary]:
        with self._lock:
            return list(self._datasets.values())

    def save_analysis_result(self, dataset_id: str, kind: str, result: Dict[str, Any]) -> None:
        with self._lock:
            self._results[f"{dataset_id}:{kind}"] = result

    def get_analysis_result(self, dataset_id: str, kind: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._results.get(f"{dataset_id}:{kind}")


class JsonFileDatasetStore(DatasetStore):
    """Same contract, persisted to a JSON file so datasets survive restarts."""

    def __init__(self, path: str):
        self.path = path
        self._lock = RLock()
        self.data = self._load()

    # ----------------------------------------------------
    # Internal Load / Save
    # ----------------------------------------------------
    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {"datasets": {}, "results": {}}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read dataset store '{self.path}', starting empty: {e}")
            return {"datasets": {}, "results": {}}

        data.setdefault("datasets", {})
        data.setdefault("results", {})
        return data

    def _save(self):
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)
        os.replace(tmp, self.path)

    # ----------------------------------------------------
    # DATASET METHODS
    # ----------------------------------------------------
    def save_dataset(self, dataset_id: str, summary: DatasetSummary) -> None:
        with self._lock:
            self.data["datasets"][dataset_id] = summary.model_dump(mode="json", by_alias=True)
            self._save()

    def get_dataset(self, dataset_id: str) -> Optional[DatasetSummary]:
        with self._lock:
            raw = self.data["datasets"].get(dataset_id)
        if raw is None:
            return None
        return DatasetSummary.model_validate(raw)

    def list_datasets(self) -> List[DatasetSummary]:
        with self._lock:
            return [DatasetSummary.model_validate(raw) for raw in self.data["datasets"].values()]

    # ----------------------------------------------------
    # ANALYSIS RESULT METHODS
    # ----------------------------------------------------
    def save_analysis_result(self, dataset_id: str, kind: str, result: Dict[str, Any]) -> None:
        with self._lock:
            self.data["results"][f"{dataset_id}:{kind}"] = result
            self._save()

    def get_analysis_result(self, dataset_id: str, kind: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self.data["results"].get(f"{dataset_id}:{kind}")


def build_store(backend: str, path: str = "datasets.json") -> DatasetStore:
    backend = backend.lower()
    if backend == "memory":
        return MemoryDatasetStore()
    if backend == "json":
        return JsonFileDatasetStore(path)
    raise ValueError(f"Unsupported store backend: {backend}")
