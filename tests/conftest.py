"""
Shared fixtures for the FinDash tests.
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest


@pytest.fixture
def acme_raw() -> List[Dict[str, Any]]:
    """Single company with one metric over two years."""
    return [
        {
            "Ticker": "ACME",
            "Company name": "Acme Co",
            "Financials": {"Revenue": {"2020": 100, "2021": 150}},
        }
    ]


@pytest.fixture
def mixed_raw() -> List[Dict[str, Any]]:
    """Several companies, including malformed entries that must be skipped."""
    return [
        {
            "Ticker": "ZED",
            "Company name": "Zed Industries",
            "Financials": {
                "Revenue": {"2022": 300, "2020": 100, "2021": 200},
                "Net_Income": {"2021": 20, "2022": "n/a", "FY2023": 40},
                "Broken": [1, 2, 3],
            },
        },
        {
            "Ticker": "ALP",
            "Company name": "Alpha Corp",
            "Financials": {
                "revenue": {"2021": 1_500_000},
                "Total_Assets": {"2021": 9_000_000, "2022": True},
            },
        },
        {
            # no ticker
            "Company name": "Ghost Ltd",
            "Financials": {"Revenue": {"2021": 1}},
        },
        {
            "Ticker": "NONAME",
            "Company name": "   ",
            "Financials": {"Revenue": {"2021": 1}},
        },
    ]
