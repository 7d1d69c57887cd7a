"""
query.py — Resolve a company/metric pair to a time series.
"""

from __future__ import annotations

from typing import Iterable, List

from findash.core.logging import get_logger
from findash.data.models import DataPoint, Observation, SeriesResult

logger = get_logger(__name__)


class SeriesNotFoundError(LookupError):
    """No observation matches the requested company and metric."""

    def __init__(self, company: str, metric: str):
        self.company = company
        self.metric = metric
        super().__init__(f"No data found for company '{company}' and metric '{metric}'")


def query_series(observations: Iterable[Observation], company: str, metric: str) -> SeriesResult:
    """
    Filter observations by company and metric, case-insensitively.

    The ticker comes from the first matching observation; tickers are assumed
    to be consistent per company and are not cross-checked.

    Raises:
        SeriesNotFoundError: when nothing matches. Carries the trimmed company
            and the trimmed, lower-cased metric.
    """
    company_key = (company or "").strip()
    metric_key = (metric or "").strip().lower()
    company_lower = company_key.lower()

    matches: List[Observation] = [
        obs for obs in observations
        if obs.company.lower() == company_lower and obs.metric == metric_key
    ]
    logger.debug("Found %d records for company=%s, metric=%s", len(matches), company_key, metric_key)

    if not matches:
        raise SeriesNotFoundError(company_key, metric_key)

    # sorted() is stable, so duplicate years keep their input order
    points = sorted((DataPoint(year=obs.year, value=obs.value) for obs in matches), key=lambda p: p.year)
    first = matches[0]
    return SeriesResult(company=first.company, ticker=first.ticker, metric=metric_key, points=points)
