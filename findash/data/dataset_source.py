"""
dataset_source.py — Raw company dataset access.

Purpose:
- Hand the raw (un-normalized) company payloads to the service layer.
- Default to the embedded dataset; optionally read a JSON file configured
  through `DATASET_PATH`.
- Stateless: every `load()` returns a fresh copy, nothing is cached.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from findash.core.config import Settings, settings
from findash.core.logging import get_logger
from findash.data.company_data import COMPANY_DATA

logger = get_logger(__name__)


class DatasetLoadError(RuntimeError):
    """Raised when the configured dataset file cannot be read or parsed."""


class DatasetSource:
    """
    Source of raw company payloads.

    With no path the embedded `COMPANY_DATA` is used. A path must point to a
    JSON file holding a list of company entries (or an object with a
    `companies` list).
    """

    def __init__(self, path: Optional[str] = None):
        self.path = (path or "").strip()

    @classmethod
    def from_settings(cls, app_settings: Optional[Settings] = None) -> "DatasetSource":
        return cls((app_settings or settings).DATASET_PATH)

    def load(self) -> List[Dict[str, Any]]:
        if not self.path:
            logger.debug("Loading embedded company data (%d companies)", len(COMPANY_DATA))
            return copy.deepcopy(COMPANY_DATA)
        return self._load_file(Path(self.path).expanduser())

    def _load_file(self, path: Path) -> List[Dict[str, Any]]:
        if not path.exists():
            raise DatasetLoadError(f"Dataset file not found at {path}")
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, ValueError) as e:
            raise DatasetLoadError(f"Failed to read dataset from {path}: {e}") from e

        if isinstance(payload, dict):
            payload = payload.get("companies")
        if not isinstance(payload, list):
            raise DatasetLoadError(f"Dataset at {path} must be a list of company entries")

        logger.debug("Loaded %d company entries from %s", len(payload), path)
        return payload


def get_dataset_source() -> DatasetSource:
    """FastAPI dependency returning the configured dataset source."""
    return DatasetSource.from_settings()
