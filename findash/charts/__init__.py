"""
charts — Line chart geometry, SVG output and headline figures.
"""

from findash.charts.line_chart import ChartDrawing, build_line_chart, render_svg
from findash.charts.summary import SeriesSummary, summarize

__all__ = [
    "ChartDrawing",
    "build_line_chart",
    "render_svg",
    "SeriesSummary",
    "summarize",
]
