"""
api_config.py — Endpoint paths of the dashboard API and URL helpers.
"""

COMPANIES_ENDPOINT = "/api/companies"
METRICS_ENDPOINT = "/api/metrics"
DATA_ENDPOINT = "/api/data"


def get_full_url(endpoint: str, base_url: str = "") -> str:
    """
    Prepend the base URL to an endpoint path.

    An endpoint that is already absolute (starts with "http") is returned as is.

    Example:
        get_full_url("/api/data", "http://localhost:4000") → "http://localhost:4000/api/data"
    """
    if endpoint.startswith("http"):
        return endpoint
    return f"{base_url.rstrip('/')}{endpoint}"
