"""
data.py — Company/metric time-series endpoint

Endpoints:
- GET /api/data?company=<name>&metric=<name> → year-ascending points

Status codes:
- 200: series found
- 400: `company` or `metric` missing/empty (checked before any data access)
- 404: no observations for the pair (`found: false`)
- 500: dataset load or normalization failure
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict

from findash.api.errors import MISSING_PARAMS_MESSAGE, error_response, internal_error_response
from findash.core.config import Settings, get_settings
from findash.core.logging import get_logger
from findash.data.dataset_source import DatasetSource, get_dataset_source
from findash.services.normalizer import normalize
from findash.services.query import SeriesNotFoundError, query_series

logger = get_logger(__name__)

router = APIRouter(tags=["data"])

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class CompanyRef(BaseModel):
    name: str
    ticker: str


class PointOut(BaseModel):
    year: int
    # int values serialize as ints
    value: Union[int, float]


class DataResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "company": {"name": "Acme Co", "ticker": "ACME"},
                "metric": "revenue",
                "points": [{"year": 2020, "value": 100}, {"year": 2021, "value": 150}],
                "count": 2,
                "found": True,
            }
        }
    )

    success: bool = True
    company: CompanyRef
    metric: str
    points: List[PointOut]
    count: int
    found: bool = True


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("/data", response_model=DataResponse)
def get_series(
    company: Optional[str] = Query(None, description="Company name, case-insensitive (e.g., 'Apple Inc.')"),
    metric: Optional[str] = Query(None, description="Metric name, case-insensitive (e.g., 'revenue')"),
    source: DatasetSource = Depends(get_dataset_source),
    app_settings: Settings = Depends(get_settings),
):
    """
    GET /api/data?company=...&metric=...

    Returns:
        { success, company: {name, ticker}, metric, points: [{year, value}], count, found }
    """
    company_key = (company or "").strip()
    metric_key = (metric or "").strip().lower()

    logger.info(f"Request received for /api/data?company={company_key}&metric={metric_key}")

    if not company_key or not metric_key:
        logger.warning("Missing required parameters")
        return error_response(
            400,
            MISSING_PARAMS_MESSAGE,
            received={"company": company_key, "metric": metric_key},
        )

    try:
        dataset = normalize(source.load())
        result = query_series(dataset.observations, company_key, metric_key)
    except SeriesNotFoundError as e:
        logger.info("No data found for the specified company and metric")
        return error_response(404, str(e), company=e.company, metric=e.metric, found=False)
    except Exception as e:
        return internal_error_response(e, app_settings, "/api/data")

    logger.info(f"Found {len(result.points)} records for company={result.company}, metric={result.metric}")
    return DataResponse(
        company=CompanyRef(name=result.company, ticker=result.ticker),
        metric=result.metric,
        points=[PointOut(year=p.year, value=p.value) for p in result.points],
        count=len(result.points),
        found=bool(result.points),
    )
