"""
Tests for the HTTP endpoints.

The dataset source and settings dependencies are overridden so the tests run
against small in-memory datasets.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from findash.core.config import Settings, get_settings
from findash.data.dataset_source import get_dataset_source
from findash.main import app


class StaticSource:
    def __init__(self, records: List[Dict[str, Any]]):
        self._records = records

    def load(self) -> List[Dict[str, Any]]:
        return self._records


class FailingSource:
    def load(self):
        raise RuntimeError("dataset exploded")


@pytest.fixture
def client_for():
    def _make(source, app_settings: Settings = None) -> TestClient:
        app.dependency_overrides[get_dataset_source] = lambda: source
        if app_settings is not None:
            app.dependency_overrides[get_settings] = lambda: app_settings
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def acme_client(client_for, acme_raw):
    return client_for(StaticSource(acme_raw))


# ============================================================================
# /api/companies and /api/metrics
# ============================================================================

def test_companies(acme_client):
    response = acme_client.get("/api/companies")

    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 1, "companies": ["Acme Co"]}


def test_metrics(acme_client):
    response = acme_client.get("/api/metrics")

    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 1, "metrics": ["revenue"]}


def test_companies_sorted(client_for, mixed_raw):
    response = client_for(StaticSource(mixed_raw)).get("/api/companies")

    assert response.json()["companies"] == ["Alpha Corp", "Zed Industries"]


@pytest.mark.parametrize("path", ["/api/companies", "/api/metrics", "/api/data?company=Acme%20Co&metric=revenue"])
def test_internal_error_is_generic_in_production(client_for, path):
    client = client_for(FailingSource(), Settings(ENVIRONMENT="production"))

    response = client.get(path)

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Internal server error"
    assert "stack" not in body
    assert "dataset exploded" not in response.text


def test_internal_error_includes_stack_in_development(client_for):
    client = client_for(FailingSource(), Settings(ENVIRONMENT="development"))

    body = client.get("/api/metrics").json()

    assert body["success"] is False
    assert "dataset exploded" in body["stack"]


# ============================================================================
# /api/data
# ============================================================================

def test_data_acme_scenario(acme_client):
    response = acme_client.get("/api/data", params={"company": "Acme Co", "metric": "REVENUE"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["found"] is True
    assert body["company"] == {"name": "Acme Co", "ticker": "ACME"}
    assert body["metric"] == "revenue"
    assert body["count"] == 2
    assert body["points"] == [{"year": 2020, "value": 100}, {"year": 2021, "value": 150}]
    assert '"value":100}' in response.text


def test_data_values_keep_their_numeric_type(client_for):
    raw = [
        {
            "Ticker": "FRAC",
            "Company name": "Fraction Co",
            "Financials": {"eps": {"2020": 1.5, "2021": 2}},
        }
    ]
    client = client_for(StaticSource(raw))

    response = client.get("/api/data", params={"company": "Fraction Co", "metric": "eps"})

    values = [p["value"] for p in response.json()["points"]]
    assert values == [1.5, 2]
    assert isinstance(values[0], float)
    assert isinstance(values[1], int)


def test_data_any_casing_matches_canonical(acme_client):
    canonical = acme_client.get("/api/data", params={"company": "Acme Co", "metric": "revenue"}).json()
    shouted = acme_client.get("/api/data", params={"company": "ACME CO", "metric": "Revenue"}).json()

    assert shouted == canonical


def test_data_points_sorted(client_for, mixed_raw):
    client = client_for(StaticSource(mixed_raw))

    body = client.get("/api/data", params={"company": "zed industries", "metric": "revenue"}).json()

    assert [p["year"] for p in body["points"]] == [2020, 2021, 2022]


def test_data_unknown_company_is_404(acme_client):
    response = acme_client.get("/api/data", params={"company": "Unknown", "metric": "revenue"})

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["found"] is False
    assert body["company"] == "Unknown"
    assert body["metric"] == "revenue"
    assert "Unknown" in body["error"]


@pytest.mark.parametrize(
    "params,received",
    [
        ({}, {"company": "", "metric": ""}),
        ({"company": "Acme Co"}, {"company": "Acme Co", "metric": ""}),
        ({"company": "   ", "metric": "Revenue"}, {"company": "", "metric": "revenue"}),
    ],
)
def test_data_missing_params_is_400(client_for, params, received):
    # Bad requests are rejected before the dataset is touched
    client = client_for(FailingSource())

    response = client.get("/api/data", params=params)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Missing required query params: company, metric"
    assert body["received"] == received


def test_root_health(acme_client):
    assert acme_client.get("/").json()["status"] == "ok"


def test_lifespan_opens_and_closes_log_sink(monkeypatch, tmp_path, acme_raw):
    from findash.core.config import settings

    log_file = tmp_path / "logs" / "server.log"
    monkeypatch.setattr(settings, "LOG_FILE", str(log_file))
    app.dependency_overrides[get_dataset_source] = lambda: StaticSource(acme_raw)
    try:
        with TestClient(app) as client:
            client.get("/api/companies")
    finally:
        app.dependency_overrides.clear()

    assert log_file.exists()
    assert "Backend server started" in log_file.read_text(encoding="utf-8")
