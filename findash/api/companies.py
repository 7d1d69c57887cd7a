"""
companies.py — Company list endpoint

Endpoints:
- GET /api/companies → sorted, deduplicated company names from the dataset

The dataset is normalized on every request; nothing is cached.
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

router = APIRouter(tags=["companies"])

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class CompaniesResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "count": 2,
                "companies": ["Apple Inc.", "Ford Motor Company"],
            }
        }
    )

    success: bool = True
    count: int
    companies: List[str]


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("/companies", response_model=CompaniesResponse)
def list_companies(
    source: DatasetSource = Depends(get_dataset_source),
    app_settings: Settings = Depends(get_settings),
):
    """
    GET /api/companies

    Returns:
        { success, count, companies }

    Raises:
        500: If the dataset cannot be loaded or normalized
    """
    logger.info("Request received for /api/companies")
    try:
        dataset = normalize(source.load())
    except Exception as e:
        return internal_error_response(e, app_settings, "/api/companies")

    logger.info(f"Found {len(dataset.companies)} companies")
    return CompaniesResponse(count=len(dataset.companies), companies=dataset.companies)
