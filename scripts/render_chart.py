"""
render_chart.py — Fetch a company/metric series from a running FinDash API and
write it as an SVG line chart.

Example:
    python scripts/render_chart.py \
        --company "Apple Inc." \
        --metric revenue \
        --output charts/apple_revenue.svg
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from findash.charts.formatting import display_metric
from findash.charts.line_chart import build_line_chart, render_svg
from findash.charts.summary import summarize
from findash.client.dashboard_client import ClientSettings, DashboardClient
from findash.client.fetch import FetchError
from findash.core.config import settings
from findash.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def cli_client_settings(base_url: Optional[str] = None) -> ClientSettings:
    """Client settings for one-shot use: no loading delay, optional base URL override."""
    config = replace(ClientSettings.from_app_settings(), min_loading_delay_seconds=0.0)
    if base_url:
        config = replace(config, base_url=base_url.rstrip("/"))
    return config


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Render a FinDash company/metric series as an SVG chart"
    )
    parser.add_argument("--company", type=str, required=True, help="Company name (e.g., 'Apple Inc.')")
    parser.add_argument("--metric", type=str, required=True, help="Metric name (e.g., revenue)")
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output SVG path (default: <company>_<metric>.svg in the current directory)",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help=f"API base URL (default: {settings.resolved_api_base_url})",
    )
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)

    client = DashboardClient(config=cli_client_settings(args.base_url))

    try:
        series = client.load_series(args.company, args.metric)
    except FetchError as e:
        logger.error(e.message)
        return 1

    if not series.points:
        logger.error(f"No data points for {args.company} / {args.metric}")
        return 1

    title = f"{series.company} - {display_metric(series.metric)}"
    svg = render_svg(build_line_chart(series.points, title))

    if args.output:
        output_file = Path(args.output)
    else:
        slug = "".join(c if c.isalnum() else "_" for c in series.company).strip("_").lower()
        output_file = Path(f"{slug}_{series.metric}.svg")
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(svg, encoding="utf-8")

    summary = summarize(series.points)
    logger.info(
        f"Wrote {output_file} ({series.ticker}, {summary.date_range}, latest {summary.latest})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
