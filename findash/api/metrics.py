"""
metrics.py — Metric list endpoint

Endpoints:
- GET /api/metrics → sorted, deduplicated, lower-cased metric names
"""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from findash.api.errors import internal_error_response
from findash.core.config import Settings, get_settings
from findash.core.logging import get_logger
from findash.data.dataset_source import DatasetSource, get_dataset_source
from findash.services.normalizer import normalize

logger = get_logger(__name__)

router = APIRouter(tags=["metrics"])


class MetricsResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "count": 2,
                "metrics": ["net_income", "revenue"],
            }
        }
    )

    success: bool = True
    count: int
    metrics: List[str]


@router.get("/metrics", response_model=MetricsResponse)
def list_metrics(
    source: DatasetSource = Depends(get_dataset_source),
    app_settings: Settings = Depends(get_settings),
):
    """
    GET /api/metrics

    Raises:
        500: If the dataset cannot be loaded or normalized
    """
    logger.info("Request received for /api/metrics")
    try:
        dataset = normalize(source.load())
    except Exception as e:
        return internal_error_response(e, app_settings, "/api/metrics")

    logger.info(f"Found {len(dataset.metrics)} metrics")
    return MetricsResponse(count=len(dataset.metrics), metrics=dataset.metrics)
