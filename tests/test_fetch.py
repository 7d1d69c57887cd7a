"""Tests for findash.client.fetch."""

from __future__ import annotations

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import List
from unittest.mock import MagicMock

import pytest
import requests

from findash.client.fetch import (
    REFRESH_SUFFIX,
    TIMEOUT_MESSAGE,
    CancellationToken,
    FetchError,
    RequestCancelled,
    fetch_json,
    with_retry,
)


def make_response(status_code: int = 200, body=None, json_error: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


class SleepRecorder:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


# ---------------------------------------------------------------------------
# fetch_json
# ---------------------------------------------------------------------------

class TestFetchJson:

    def test_success_returns_body(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(body={"success": True, "companies": ["Acme Co"]})

        body = fetch_json("http://api.test/api/companies", session=session, timeout=3)

        assert body["companies"] == ["Acme Co"]
        _, kwargs = session.get.call_args
        assert kwargs["timeout"] == 3
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_extra_headers_are_merged(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(body={"success": True})

        fetch_json("http://api.test", session=session, headers={"X-Trace": "1"})

        headers = session.get.call_args.kwargs["headers"]
        assert headers["X-Trace"] == "1"
        assert headers["Accept"] == "application/json"

    def test_timeout(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(FetchError) as exc_info:
            fetch_json("http://api.test", session=session)

        assert exc_info.value.message == TIMEOUT_MESSAGE
        assert exc_info.value.status_code is None

    def test_connection_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(FetchError) as exc_info:
            fetch_json("http://api.test", session=session)

        assert exc_info.value.message.startswith("Network error")

    def test_non_2xx_uses_server_message(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(
            404, {"success": False, "error": "No data found for company 'X' and metric 'y'"}
        )

        with pytest.raises(FetchError) as exc_info:
            fetch_json("http://api.test", session=session)

        assert exc_info.value.message == "No data found for company 'X' and metric 'y'"
        assert exc_info.value.status_code == 404

    def test_non_2xx_without_body(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(503, json_error=True)

        with pytest.raises(FetchError) as exc_info:
            fetch_json("http://api.test", session=session)

        assert exc_info.value.message == "HTTP error! status: 503"
        assert exc_info.value.status_code == 503

    def test_success_false_is_failure(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(200, {"success": False, "error": "Dataset offline"})

        with pytest.raises(FetchError, match="Dataset offline"):
            fetch_json("http://api.test", session=session)

    def test_success_false_without_message_uses_fallback(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(200, {"success": False})

        with pytest.raises(FetchError, match="Failed to load metrics"):
            fetch_json("http://api.test", session=session, failure_message="Failed to load metrics")

    def test_invalid_json(self) -> None:
        session = MagicMock()
        session.get.return_value = make_response(200, json_error=True)

        with pytest.raises(FetchError, match="Invalid JSON"):
            fetch_json("http://api.test", session=session)

    def test_cancelled_before_send(self) -> None:
        session = MagicMock()
        token = CancellationToken()
        token.cancel()

        with pytest.raises(RequestCancelled):
            fetch_json("http://api.test", session=session, token=token)

        session.get.assert_not_called()

    def test_cancelled_while_in_flight(self) -> None:
        token = CancellationToken()
        session = MagicMock()

        def cancel_then_respond(*args, **kwargs):
            token.cancel()
            return make_response(body={"success": True})

        session.get.side_effect = cancel_then_respond

        with pytest.raises(RequestCancelled):
            fetch_json("http://api.test", session=session, token=token)


# ---------------------------------------------------------------------------
# with_retry
# ---------------------------------------------------------------------------

class TestWithRetry:

    def test_timeouts_then_success(self) -> None:
        session = MagicMock()
        session.get.side_effect = [
            requests.Timeout(),
            requests.Timeout(),
            make_response(body={"success": True, "metrics": ["revenue"]}),
        ]
        sleep = SleepRecorder()

        body = with_retry(lambda: fetch_json("http://api.test", session=session), sleep=sleep)

        assert body["metrics"] == ["revenue"]
        assert session.get.call_count == 3
        assert sleep.calls == [2.0, 4.0]

    def test_final_failure_gets_refresh_suffix(self) -> None:
        calls = []

        def operation():
            calls.append(1)
            raise FetchError("HTTP error! status: 500", 500)

        sleep = SleepRecorder()
        with pytest.raises(FetchError) as exc_info:
            with_retry(operation, max_attempts=3, base_delay=0.5, sleep=sleep)

        assert len(calls) == 3
        assert sleep.calls == [0.5, 1.0]
        assert exc_info.value.message == "HTTP error! status: 500" + REFRESH_SUFFIX
        assert exc_info.value.status_code == 500

    def test_single_attempt_does_not_sleep(self) -> None:
        sleep = SleepRecorder()

        def operation():
            raise FetchError("nope")

        with pytest.raises(FetchError):
            with_retry(operation, max_attempts=1, sleep=sleep)

        assert sleep.calls == []

    def test_cancellation_is_not_retried(self) -> None:
        calls = []

        def operation():
            calls.append(1)
            raise RequestCancelled()

        with pytest.raises(RequestCancelled):
            with_retry(operation, sleep=SleepRecorder())

        assert len(calls) == 1

    def test_unrelated_errors_propagate(self) -> None:
        calls = []

        def operation():
            calls.append(1)
            raise KeyError("bug")

        with pytest.raises(KeyError):
            with_retry(operation, sleep=SleepRecorder())

        assert len(calls) == 1


# ---------------------------------------------------------------------------
# Whole-call deadline
# ---------------------------------------------------------------------------

class TrickleHandler(BaseHTTPRequestHandler):
    """Sends a small JSON body a few bytes at a time."""

    body = b'{"success": true, "companies": [], "x": 1}'
    piece_size = 6
    pause_seconds = 0.4

    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(self.body)))
        self.end_headers()
        try:
            for i in range(0, len(self.body), self.piece_size):
                self.wfile.write(self.body[i:i + self.piece_size])
                self.wfile.flush()
                time.sleep(self.pause_seconds)
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format, *args):
        pass


@pytest.fixture
def trickle_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), TrickleHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}/api/companies"
    server.shutdown()
    server.server_close()


class TestDeadline:

    def test_slow_body_times_out_as_a_whole(self, trickle_url) -> None:
        # every socket read completes well within 1s, the full body takes ~3s
        started = time.monotonic()

        with pytest.raises(FetchError) as exc_info:
            fetch_json(trickle_url, timeout=1.0)

        elapsed = time.monotonic() - started
        assert exc_info.value.message == TIMEOUT_MESSAGE
        assert elapsed < 2.0

    def test_fast_body_within_deadline(self, trickle_url, monkeypatch) -> None:
        monkeypatch.setattr(TrickleHandler, "pause_seconds", 0.0)

        body = fetch_json(trickle_url, timeout=5.0)

        assert body["companies"] == []

    def test_cancel_interrupts_wait(self) -> None:
        release = threading.Event()
        session = MagicMock()
        session.get.side_effect = lambda *a, **kw: release.wait(5) and make_response(body={"success": True})
        token = CancellationToken()
        timer = threading.Timer(0.1, token.cancel)
        started = time.monotonic()
        timer.start()
        try:
            with pytest.raises(RequestCancelled):
                fetch_json("http://api.test", session=session, token=token, timeout=5.0)
        finally:
            release.set()
            timer.cancel()

        assert time.monotonic() - started < 2.0
