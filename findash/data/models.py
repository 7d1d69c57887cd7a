"""
models.py — Shared Data Layer for the Dashboard

Purpose:
- Define the typed records that flow from the raw dataset to API responses.
- Provide the per-field deserialization step for raw company payloads.

Raw wire format (one entry per company):
    {
        "Ticker": "ACME",
        "Company name": "Acme Co",
        "Financials": {"Revenue": {"2020": 100, "2021": 150}}
    }

Deserialization is best-effort: a company without a ticker or name is dropped,
and inside `Financials` any metric whose year map is not a mapping, any
non-numeric value and any non-integer year key is skipped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from findash.core.logging import get_logger

logger = get_logger(__name__)


Year = int

TICKER_KEY = "Ticker"
COMPANY_NAME_KEY = "Company name"
FINANCIALS_KEY = "Financials"


@dataclass(frozen=True)
class RawCompanyRecord:
    """
    One company of the source dataset after field validation.

    Example:
        financials = {
            "Revenue": [(2020, 100.0), (2021, 150.0)],
        }
    """
    ticker: str
    company_name: str
    financials: Dict[str, List[Tuple[Year, float]]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["RawCompanyRecord"]:
        """
        Validate a raw JSON company entry.

        Returns None when the entry is not a mapping or lacks a ticker or
        company name. Malformed financial entries are skipped, never raised.
        """
        if not isinstance(payload, Mapping):
            logger.debug("Skipping non-mapping company entry: %r", payload)
            return None

        ticker = _clean_str(payload.get(TICKER_KEY))
        company_name = _clean_str(payload.get(COMPANY_NAME_KEY))
        if not ticker or not company_name:
            logger.debug("Skipping company entry without ticker or name: %r", payload.get(TICKER_KEY))
            return None

        financials: Dict[str, List[Tuple[Year, float]]] = {}
        raw_financials = payload.get(FINANCIALS_KEY) or {}
        if not isinstance(raw_financials, Mapping):
            raw_financials = {}

        for metric, years in raw_financials.items():
            if not isinstance(metric, str) or not isinstance(years, Mapping):
                continue

            series: List[Tuple[Year, float]] = []
            for year_str, value in years.items():
                if not _is_number(value):
                    continue
                year = _parse_year(year_str)
                if year is None:
                    continue
                series.append((year, value))

            financials[metric] = series

        return cls(ticker=ticker, company_name=company_name, financials=financials)


@dataclass(frozen=True)
class Observation:
    """
    One (company, metric, year) data point extracted from the raw dataset.

    `metric` is always lower-cased at creation.
    """
    company: str
    ticker: str
    metric: str
    year: Year
    value: float


@dataclass(frozen=True)
class DataPoint:
    year: Year
    value: float


@dataclass
class NormalizedDataset:
    """Flattened dataset: observations plus sorted, deduplicated name lists."""
    observations: List[Observation]
    companies: List[str]
    metrics: List[str]


@dataclass
class SeriesResult:
    """A resolved company/metric series, points sorted ascending by year."""
    company: str
    ticker: str
    metric: str
    points: List[DataPoint]


# -----------------------------------------------------------------------------
# Field helpers
# -----------------------------------------------------------------------------

def _clean_str(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a financial value; NaN/inf cannot be serialized
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_year(year_str: Any) -> Optional[Year]:
    if isinstance(year_str, bool):
        return None
    if isinstance(year_str, int):
        return year_str
    try:
        return int(str(year_str).strip())
    except (ValueError, TypeError):
        return None
