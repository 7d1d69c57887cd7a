"""Tests for number formatting, metric labels and series summaries."""

from __future__ import annotations

import pytest

from findash.charts import summarize
from findash.charts.formatting import display_metric, format_number, split_number
from findash.charts.summary import date_range, percentage_change
from findash.data.models import DataPoint


@pytest.mark.parametrize(
    "value,expected",
    [
        (383_285_000_000, "383.3B"),
        (1_000_000_000, "1.0B"),
        (2_500_000, "2.5M"),
        (12_340, "12.3K"),
        (1_000, "1.0K"),
        (950, "950"),
        (0, "0"),
        (-4_200_000, "-4.2M"),
        (12.6, "13"),
        (2.5, "3"),
        (0.5, "1"),
        (-2.5, "-3"),
        (1_250_000, "1.3M"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_split_number_keeps_unit_separate():
    assert split_number(1_500_000) == ("1.5", "M")
    assert split_number(42) == ("42", "")


@pytest.mark.parametrize(
    "metric,expected",
    [
        ("net_income", "Net Income"),
        ("revenue", "Revenue"),
        ("TOTAL_ASSETS", "Total Assets"),
        ("free  cash_flow", "Free Cash Flow"),
        ("", ""),
    ],
)
def test_display_metric(metric, expected):
    assert display_metric(metric) == expected


# ---------------------------------------------------------------------------
# percentage_change / date_range
# ---------------------------------------------------------------------------

def test_percentage_change():
    assert percentage_change(100, 150) == pytest.approx(50.0)
    assert percentage_change(200, 150) == pytest.approx(-25.0)


def test_percentage_change_uses_absolute_base():
    assert percentage_change(-100, -50) == pytest.approx(50.0)


def test_percentage_change_guards():
    assert percentage_change(0, 10) is None
    assert percentage_change(0.00001, 10) is None
    assert percentage_change(1, 100_000_000) is None


def test_date_range():
    assert date_range([]) == ""
    assert date_range([DataPoint(2021, 1)]) == "2021"
    assert date_range([DataPoint(2019, 1), DataPoint(2023, 2)]) == "2019 - 2023"


# ---------------------------------------------------------------------------
# summarize
# ---------------------------------------------------------------------------

def test_summarize_empty():
    assert summarize([]) is None


def test_summarize_single_point():
    summary = summarize([DataPoint(2021, 2_000_000)])

    assert str(summary.latest) == "2.0M"
    assert summary.previous is None
    assert summary.percentage_change is None
    assert summary.direction is None
    assert summary.date_range == "2021"
    assert summary.count == 1


def test_summarize_series():
    summary = summarize([DataPoint(2020, 100_000_000), DataPoint(2021, 90_000_000), DataPoint(2022, 99_000_000)])

    assert summary.latest.value == "99.0"
    assert summary.latest.unit == "M"
    assert str(summary.previous) == "90.0M"
    assert summary.percentage_change == pytest.approx(10.0)
    assert summary.direction == "positive"
    assert summary.date_range == "2020 - 2022"
    assert summary.count == 3


def test_summarize_negative_direction():
    summary = summarize([DataPoint(2020, 10), DataPoint(2021, 5)])

    assert summary.direction == "negative"
