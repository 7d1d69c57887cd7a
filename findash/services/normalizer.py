"""
normalizer.py — Flatten raw company financials into observations.

Converts the nested per-company structure (metric → year → value) into flat
`Observation` records plus the sorted company and metric name lists that the
API exposes.

Rules:
- Company entries missing a ticker or company name produce nothing.
- Metrics are lower-cased so lookups are case-insensitive.
- Malformed year maps, non-numeric values and non-integer years are skipped
  silently (see `RawCompanyRecord.from_payload`).
- Duplicate (company, metric, year) entries are kept as separate observations.

This module does NOT cache anything; callers normalize on every request.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Set

from findash.core.logging import get_logger
from findash.data.models import NormalizedDataset, Observation, RawCompanyRecord

logger = get_logger(__name__)


def flatten_record(record: RawCompanyRecord) -> List[Observation]:
    """Return one Observation per (metric, year, value) triple of a company."""
    observations: List[Observation] = []
    for metric, series in record.financials.items():
        field_name = metric.lower()
        for year, value in series:
            observations.append(
                Observation(
                    company=record.company_name,
                    ticker=record.ticker,
                    metric=field_name,
                    year=year,
                    value=value,
                )
            )
    return observations


def normalize(raw: Iterable[Any]) -> NormalizedDataset:
    """
    Normalize raw company payloads.

    Args:
        raw: Sequence of company entries in the wire format
            ({"Ticker", "Company name", "Financials"}).

    Returns:
        NormalizedDataset with observations in input order and deduplicated,
        ascending company/metric lists derived from those observations.
    """
    observations: List[Observation] = []
    companies: Set[str] = set()
    metrics: Set[str] = set()
    skipped = 0

    for payload in raw:
        record = RawCompanyRecord.from_payload(payload)
        if record is None:
            skipped += 1
            continue

        for obs in flatten_record(record):
            observations.append(obs)
            companies.add(obs.company)
            metrics.add(obs.metric)

    if skipped:
        logger.debug("Skipped %d company entries without ticker or name", skipped)

    dataset = NormalizedDataset(
        observations=observations,
        companies=sorted(companies),
        metrics=sorted(metrics),
    )
    logger.info(
        f"Processed {len(dataset.observations)} data points for "
        f"{len(dataset.companies)} companies and {len(dataset.metrics)} metrics"
    )
    return dataset
