"""
line_chart.py — Line chart geometry and SVG output.

Purpose:
- Map (year, value) points to screen coordinates on a fixed canvas.
- Produce drawing instructions: title, axes, x ticks (one per distinct year),
  six y ticks with gridlines (five equal intervals), a polyline and a marker per
  point.
- Serialize the instructions to SVG markup.

Both scales guard a zero-width domain (all years equal, or all values equal)
by dividing by 1 instead, so a single point lands on the left/bottom edge.

`build_line_chart` draws the polyline in the order given; callers sort by year.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape, quoteattr

from findash.charts.formatting import format_number
from findash.data.models import DataPoint

CHART_WIDTH = 800
CHART_HEIGHT = 420
Y_TICK_INTERVALS = 5
TICK_LENGTH = 6
MARKER_RADIUS = 3


@dataclass(frozen=True)
class Margin:
    top: float = 30
    right: float = 30
    bottom: float = 40
    left: float = 70


# -----------------------------------------------------------------------------
# Drawing primitives
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    css_class: str


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    css_class: str
    anchor: str = "middle"
    baseline: Optional[str] = None


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float = MARKER_RADIUS
    css_class: str = "dot"


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Tuple[float, float], ...]
    css_class: str = "line"

    @property
    def path_data(self) -> str:
        """SVG path commands: 'M x y L x y ...'."""
        return " ".join(
            f"{'M' if i == 0 else 'L'} {_num(x)} {_num(y)}"
            for i, (x, y) in enumerate(self.points)
        )


@dataclass(frozen=True)
class Tick:
    value: float
    mark: Line
    label: Text
    grid: Optional[Line] = None


@dataclass
class ChartDrawing:
    width: float
    height: float
    title: Text
    axes: List[Line]
    x_ticks: List[Tick]
    y_ticks: List[Tick]
    polyline: Polyline
    markers: List[Circle] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Scales
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LinearScale:
    """
    Linear map from [domain_min, domain_max] onto [range_start, range_start + span].

    With `inverted`, larger values map to smaller coordinates (SVG y axis).
    """
    domain_min: float
    domain_max: float
    range_start: float
    span: float
    inverted: bool = False

    def __call__(self, v: float) -> float:
        extent = (self.domain_max - self.domain_min) or 1
        ratio = (v - self.domain_min) / extent
        if self.inverted:
            return self.range_start + self.span - ratio * self.span
        return self.range_start + ratio * self.span


# -----------------------------------------------------------------------------
# Builder
# -----------------------------------------------------------------------------

def build_line_chart(
    points: Sequence[DataPoint],
    title: str,
    width: float = CHART_WIDTH,
    height: float = CHART_HEIGHT,
    margin: Margin = Margin(),
) -> ChartDrawing:
    """
    Compute the drawing instructions for a single-series line chart.

    Raises:
        ValueError: if `points` is empty.
    """
    if not points:
        raise ValueError("Cannot build a chart without data points")

    years = [p.year for p in points]
    values = [p.value for p in points]
    min_val, max_val = min(values), max(values)

    x_scale = LinearScale(min(years), max(years), margin.left, width - margin.left - margin.right)
    y_scale = LinearScale(min_val, max_val, margin.top, height - margin.top - margin.bottom, inverted=True)

    bottom = height - margin.bottom
    axes = [
        Line(margin.left, bottom, width - margin.right, bottom, "axis"),
        Line(margin.left, margin.top, margin.left, bottom, "axis"),
    ]

    x_ticks: List[Tick] = []
    for year in dict.fromkeys(years):
        x = x_scale(year)
        x_ticks.append(
            Tick(
                value=year,
                mark=Line(x, bottom, x, bottom + TICK_LENGTH, "tick"),
                label=Text(x, bottom + 20, str(year), "tick-label"),
            )
        )

    y_ticks: List[Tick] = []
    for i in range(Y_TICK_INTERVALS + 1):
        v = min_val + (i * (max_val - min_val)) / Y_TICK_INTERVALS
        y = y_scale(v)
        y_ticks.append(
            Tick(
                value=v,
                mark=Line(margin.left - TICK_LENGTH, y, margin.left, y, "tick"),
                label=Text(margin.left - 10, y, format_number(v), "tick-label", anchor="end", baseline="middle"),
                grid=Line(margin.left, y, width - margin.right, y, "grid"),
            )
        )

    coords = tuple((x_scale(p.year), y_scale(p.value)) for p in points)

    return ChartDrawing(
        width=width,
        height=height,
        title=Text(width / 2, 18, title, "chart-title"),
        axes=axes,
        x_ticks=x_ticks,
        y_ticks=y_ticks,
        polyline=Polyline(coords),
        markers=[Circle(x, y) for x, y in coords],
    )


# -----------------------------------------------------------------------------
# SVG output
# -----------------------------------------------------------------------------

def render_svg(drawing: ChartDrawing) -> str:
    """Serialize a ChartDrawing to a standalone SVG document."""
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" class="chart" '
        f'viewBox="0 0 {_num(drawing.width)} {_num(drawing.height)}">',
        _text(drawing.title),
    ]
    parts.extend(_line(line) for line in drawing.axes)

    for tick in drawing.x_ticks:
        parts.append(f"<g>{_line(tick.mark)}{_text(tick.label)}</g>")
    for tick in drawing.y_ticks:
        grid = _line(tick.grid) if tick.grid else ""
        parts.append(f"<g>{_line(tick.mark)}{_text(tick.label)}{grid}</g>")

    parts.append(f'<path d="{drawing.polyline.path_data}" class="{drawing.polyline.css_class}" fill="none"/>')
    parts.extend(
        f'<circle cx="{_num(c.cx)}" cy="{_num(c.cy)}" r="{_num(c.r)}" class="{c.css_class}"/>'
        for c in drawing.markers
    )
    parts.append("</svg>")
    return "\n".join(parts)


def _num(v: float) -> str:
    text = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _line(line: Line) -> str:
    return (
        f'<line x1="{_num(line.x1)}" y1="{_num(line.y1)}" '
        f'x2="{_num(line.x2)}" y2="{_num(line.y2)}" class="{line.css_class}"/>'
    )


def _text(text: Text) -> str:
    baseline = f' dominant-baseline="{text.baseline}"' if text.baseline else ""
    return (
        f'<text x="{_num(text.x)}" y="{_num(text.y)}" text-anchor={quoteattr(text.anchor)}'
        f'{baseline} class="{text.css_class}">{escape(text.text)}</text>'
    )
