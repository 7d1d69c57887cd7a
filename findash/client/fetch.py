"""
fetch.py — JSON fetch with timeout, cancellation and bounded retry.

Responsibilities:
- `fetch_json`: one GET request. The whole call (connect, headers and
  body) is bounded by a single timeout and can be abandoned through a token.
  Every failure mode (timeout, connection error, non-2xx, `success: false`,
  bad JSON) becomes a `FetchError` carrying a user-facing message.
- `with_retry`: run an operation up to `max_attempts` times with linear
  backoff (attempt n waits n * base_delay); the final error gets a suffix
  suggesting a page refresh.
- `CancellationToken`: lets a caller abandon a request whose result is no
  longer wanted. Cancelled requests are never retried.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from findash.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY_SECONDS = 2.0
# how often a waiting request checks its cancellation token
CANCEL_POLL_SECONDS = 0.05

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

TIMEOUT_MESSAGE = "Request timed out. Please try again."
REFRESH_SUFFIX = " Please try refreshing the page."


class FetchError(RuntimeError):
    """A failed API call, normalized to a message and an optional HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RequestCancelled(FetchError):
    """The caller cancelled the request; its result must be discarded."""

    def __init__(self, message: str = "Request was cancelled."):
        super().__init__(message)


class CancellationToken:
    """Thread-safe flag shared between a request and whoever may supersede it."""

    def __init__(self):
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelled()


# -----------------------------------------------------------------------------
# Single request
# -----------------------------------------------------------------------------

def fetch_json(
    url: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    session: Optional[requests.Session] = None,
    token: Optional[CancellationToken] = None,
    failure_message: str = "Request failed",
) -> Dict[str, Any]:
    """
    GET `url` and return the decoded JSON object.

    Args:
        failure_message: Message used when the body reports `success: false`
            without an `error` field.

    Raises:
        RequestCancelled: token cancelled before sending or while in flight.
        FetchError: any other failure.
    """
    http = session or requests
    merged_headers = {**DEFAULT_HEADERS, **(headers or {})}

    if token is not None:
        token.raise_if_cancelled()

    logger.debug("Requesting %s params=%s", url, params)
    try:
        response = _send(http, url, timeout, token, params=params, headers=merged_headers)
    except requests.Timeout as e:
        raise FetchError(TIMEOUT_MESSAGE) from e
    except requests.RequestException as e:
        raise FetchError(f"Network error: {e}") from e

    if token is not None:
        token.raise_if_cancelled()

    status = response.status_code
    if not 200 <= status < 300:
        body = _safe_json(response)
        message = body.get("error") if isinstance(body, dict) else None
        raise FetchError(message or f"HTTP error! status: {status}", status)

    try:
        body = response.json()
    except ValueError as e:
        raise FetchError("Invalid JSON in response", status) from e

    if not isinstance(body, dict):
        raise FetchError("Unexpected response format", status)
    if body.get("success") is False:
        raise FetchError(body.get("error") or body.get("message") or failure_message, status)
    return body


def _send(
    http: Any,
    url: str,
    timeout: float,
    token: Optional[CancellationToken],
    **kwargs: Any,
) -> requests.Response:
    """
    Run the GET on a worker thread and wait at most `timeout` seconds for it.

    `requests` only bounds each connect and socket read, not the whole call.
    An abandoned request finishes on its own thread and its response is dropped.
    """
    deadline = time.monotonic() + timeout
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="findash-fetch")
    try:
        future = executor.submit(http.get, url, timeout=timeout, **kwargs)
    finally:
        executor.shutdown(wait=False)

    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            future.cancel()
            logger.warning(f"Request to {url} exceeded {timeout}s, abandoning it")
            raise FetchError(TIMEOUT_MESSAGE)
        try:
            return future.result(timeout=min(CANCEL_POLL_SECONDS, remaining))
        except FuturesTimeoutError:
            if token is not None and token.cancelled:
                future.cancel()
                raise RequestCancelled()


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


# -----------------------------------------------------------------------------
# Retry
# -----------------------------------------------------------------------------

def with_retry(
    operation: Callable[[], T],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run `operation` until it succeeds or `max_attempts` is reached.

    Only `FetchError`s are retried; `RequestCancelled` and unrelated exceptions
    propagate immediately. After attempt n fails the wait is n * base_delay.

    Raises:
        FetchError: the last failure, message suffixed with a refresh hint.
    """
    retrying = Retrying(
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_incrementing(start=base_delay, increment=base_delay),
        retry=retry_if_exception_type(FetchError) & retry_if_not_exception_type(RequestCancelled),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        sleep=sleep,
        reraise=True,
    )
    try:
        return retrying(operation)
    except RequestCancelled:
        raise
    except FetchError as e:
        logger.error(f"Giving up after {max_attempts} attempts: {e.message}")
        raise FetchError(f"{e.message}{REFRESH_SUFFIX}", e.status_code) from e
