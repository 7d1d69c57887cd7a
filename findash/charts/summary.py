"""
summary.py — Headline figures shown next to a chart.

Given year-ascending points:
- latest value (abbreviated, with unit suffix)
- previous value (when there are at least two points)
- period-over-period percentage change
- covered period ("2021" or "2019 - 2023")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from findash.charts.formatting import split_number
from findash.data.models import DataPoint

# |previous| below this is treated as zero
MIN_BASE_VALUE = 0.0001
# Changes beyond ±1,000,000 % are not meaningful for display
MAX_ABS_CHANGE = 1_000_000


@dataclass(frozen=True)
class FormattedValue:
    value: str
    unit: str

    def __str__(self) -> str:
        return f"{self.value}{self.unit}"

    @classmethod
    def of(cls, n: float) -> "FormattedValue":
        digits, unit = split_number(n)
        return cls(value=digits, unit=unit)


@dataclass(frozen=True)
class SeriesSummary:
    latest: FormattedValue
    previous: Optional[FormattedValue]
    percentage_change: Optional[float]
    date_range: str
    count: int

    @property
    def direction(self) -> Optional[str]:
        if self.percentage_change is None:
            return None
        return "positive" if self.percentage_change >= 0 else "negative"


def percentage_change(previous: float, latest: float) -> Optional[float]:
    if abs(previous) < MIN_BASE_VALUE:
        return None
    change = ((latest - previous) / abs(previous)) * 100
    return None if abs(change) > MAX_ABS_CHANGE else change


def date_range(points: Sequence[DataPoint]) -> str:
    if not points:
        return ""
    start, end = points[0].year, points[-1].year
    return f"{start}" if start == end else f"{start} - {end}"


def summarize(points: Sequence[DataPoint]) -> Optional[SeriesSummary]:
    """Return None for an empty series."""
    if not points:
        return None

    latest = points[-1]
    previous = points[-2] if len(points) >= 2 else None

    return SeriesSummary(
        latest=FormattedValue.of(latest.value),
        previous=FormattedValue.of(previous.value) if previous else None,
        percentage_change=percentage_change(previous.value, latest.value) if previous else None,
        date_range=date_range(points),
        count=len(points),
    )
