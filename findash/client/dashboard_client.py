"""
dashboard_client.py — HTTP client for the FinDash API.

Responsibilities:
- Load the company and metric option lists (two parallel requests).
- Load one company/metric series.
- Apply the retry policy and the minimum loading duration around each load.

The client is sync/blocking; parallelism for the option lists comes from a
small thread pool. Safe to share between threads as long as the underlying
`requests.Session` is.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import requests

from findash.client.api_config import COMPANIES_ENDPOINT, DATA_ENDPOINT, METRICS_ENDPOINT, get_full_url
from findash.client.fetch import CancellationToken, FetchError, fetch_json, with_retry
from findash.core.config import Settings, settings
from findash.core.logging import get_logger
from findash.data.models import DataPoint

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClientSettings:
    base_url: str
    timeout_seconds: float
    max_attempts: int
    retry_delay_seconds: float
    min_loading_delay_seconds: float

    @classmethod
    def from_app_settings(cls, app_settings: Optional[Settings] = None) -> "ClientSettings":
        s = app_settings or settings
        return cls(
            base_url=s.resolved_api_base_url,
            timeout_seconds=s.API_TIMEOUT_SECONDS,
            max_attempts=s.API_MAX_ATTEMPTS,
            retry_delay_seconds=s.API_RETRY_DELAY_SECONDS,
            min_loading_delay_seconds=s.API_MIN_LOADING_DELAY_SECONDS,
        )


@dataclass
class DashboardOptions:
    companies: List[str]
    metrics: List[str]


@dataclass
class SeriesPayload:
    company: str
    ticker: str
    metric: str
    points: List[DataPoint]


class DashboardClient:
    """
    Thin wrapper over `requests.Session` for the three dashboard endpoints.

    `fetch_*` methods perform a single attempt; `load_*` methods add the
    retry policy and the minimum loading duration.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        config: Optional[ClientSettings] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._session = session or requests.Session()
        self._config = config or ClientSettings.from_app_settings()
        self._sleep = sleep

    @property
    def config(self) -> ClientSettings:
        return self._config

    # --------------------------------------------------------------------- #
    # Single attempts
    # --------------------------------------------------------------------- #
    def fetch_companies(self, token: Optional[CancellationToken] = None) -> List[str]:
        body = self._get(COMPANIES_ENDPOINT, token=token, failure_message="Failed to load companies")
        return _string_list(body.get("companies"))

    def fetch_metrics(self, token: Optional[CancellationToken] = None) -> List[str]:
        body = self._get(METRICS_ENDPOINT, token=token, failure_message="Failed to load metrics")
        return _string_list(body.get("metrics"))

    def fetch_series(self, company: str, metric: str, token: Optional[CancellationToken] = None) -> SeriesPayload:
        body = self._get(
            DATA_ENDPOINT,
            params={"company": company, "metric": metric},
            token=token,
            failure_message="No data available",
        )
        return _parse_series(body, company, metric)

    # --------------------------------------------------------------------- #
    # Loads with retry
    # --------------------------------------------------------------------- #
    def load_options(self, token: Optional[CancellationToken] = None) -> DashboardOptions:
        """Fetch companies and metrics in parallel; both must succeed."""
        return self._retry(lambda: self._load_options_once(token))

    def load_series(self, company: str, metric: str, token: Optional[CancellationToken] = None) -> SeriesPayload:
        return self._retry(lambda: self._load_series_once(company, metric, token))

    def _load_options_once(self, token: Optional[CancellationToken]) -> DashboardOptions:
        started = time.monotonic()
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="findash-options") as executor:
            companies_future = executor.submit(self.fetch_companies, token)
            metrics_future = executor.submit(self.fetch_metrics, token)
            companies = companies_future.result()
            metrics = metrics_future.result()
        self._pad_to_min_duration(started)
        logger.info(f"Loaded {len(companies)} companies and {len(metrics)} metrics")
        return DashboardOptions(companies=companies, metrics=metrics)

    def _load_series_once(self, company: str, metric: str, token: Optional[CancellationToken]) -> SeriesPayload:
        started = time.monotonic()
        payload = self.fetch_series(company, metric, token=token)
        self._pad_to_min_duration(started)
        return payload

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _retry(self, operation):
        return with_retry(
            operation,
            max_attempts=self._config.max_attempts,
            base_delay=self._config.retry_delay_seconds,
            sleep=self._sleep,
        )

    def _pad_to_min_duration(self, started: float) -> None:
        remaining = self._config.min_loading_delay_seconds - (time.monotonic() - started)
        if remaining > 0:
            self._sleep(remaining)

    def _get(self, endpoint: str, **kwargs: Any) -> Dict[str, Any]:
        return fetch_json(
            get_full_url(endpoint, self._config.base_url),
            timeout=self._config.timeout_seconds,
            session=self._session,
            **kwargs,
        )


# -----------------------------------------------------------------------------
# Payload parsing
# -----------------------------------------------------------------------------

def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def _parse_series(body: Dict[str, Any], company: str, metric: str) -> SeriesPayload:
    company_info = body.get("company") or {}
    try:
        points = [DataPoint(year=int(p["year"]), value=float(p["value"])) for p in body.get("points") or []]
    except (KeyError, TypeError, ValueError) as e:
        raise FetchError(f"Unexpected response format: {e}") from e

    return SeriesPayload(
        company=company_info.get("name") or company,
        ticker=company_info.get("ticker") or "",
        metric=body.get("metric") or metric,
        points=sorted(points, key=lambda p: p.year),
    )
