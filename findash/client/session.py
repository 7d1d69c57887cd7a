"""
session.py — Dashboard view state with stale-result protection.

One `DashboardSession` backs one dashboard view: the option lists, the
current company/metric selection, the loaded series and the error to show.

Every change of selection bumps a generation counter and cancels the token
of the load in flight. A load is tied to the generation it started in via a
`LoadTicket`; completing or failing a ticket from an older generation is a
no-op, so a superseded response can never overwrite newer state.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from findash.charts.formatting import display_metric
from findash.charts.summary import SeriesSummary, summarize
from findash.client.dashboard_client import DashboardClient, SeriesPayload
from findash.client.fetch import CancellationToken, FetchError, RequestCancelled
from findash.core.logging import get_logger
from findash.data.models import DataPoint

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoadTicket:
    generation: int
    company: str
    metric: str
    token: CancellationToken


class DashboardSession:

    def __init__(self, client: DashboardClient, clock: Callable[[], float] = time.time):
        self._client = client
        self._clock = clock
        self._lock = threading.RLock()
        self._generation = 0
        self._ticket: Optional[LoadTicket] = None

        self.companies: List[str] = []
        self.metrics: List[str] = []
        self.selected_company = ""
        self.selected_metric = ""
        self.points: List[DataPoint] = []
        self.ticker = ""
        self.error: Optional[str] = None
        self.is_loading = False
        self.is_loading_options = False
        self.last_updated: Optional[float] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def display_metric(self) -> str:
        return display_metric(self.selected_metric)

    @property
    def summary(self) -> Optional[SeriesSummary]:
        return summarize(self.points)

    @property
    def chart_title(self) -> str:
        return f"{self.selected_company} - {self.display_metric}"

    # --------------------------------------------------------------------- #
    # Options
    # --------------------------------------------------------------------- #
    def load_options(self) -> bool:
        """Load the company and metric lists. Returns False on final failure."""
        self.is_loading_options = True
        self.error = None
        try:
            options = self._client.load_options()
        except FetchError as e:
            logger.error(f"Error loading options: {e.message}")
            self.error = e.message
            return False
        finally:
            self.is_loading_options = False

        self.companies = options.companies
        self.metrics = options.metrics
        self.last_updated = self._clock()
        return True

    # --------------------------------------------------------------------- #
    # Selection
    # --------------------------------------------------------------------- #
    def select_company(self, company: str) -> None:
        """Change the company; the metric is reset, so nothing is loaded."""
        with self._lock:
            self.selected_company = company
            self.selected_metric = ""
            self._invalidate()
            self._clear_series()

    def select_metric(self, metric: str) -> bool:
        """Change the metric and load the series when a company is selected."""
        with self._lock:
            self.selected_metric = metric
            self._invalidate()
            self._clear_series()
        return self.refresh()

    def start_over(self) -> None:
        with self._lock:
            self.selected_company = ""
            self.selected_metric = ""
            self._invalidate()
            self._clear_series()

    # --------------------------------------------------------------------- #
    # Series loading
    # --------------------------------------------------------------------- #
    def refresh(self) -> bool:
        """
        Load the series for the current selection.

        Returns True only when the result was applied to the session.
        """
        ticket = self.begin_load()
        if ticket is None:
            return False
        try:
            payload = self._client.load_series(ticket.company, ticket.metric, token=ticket.token)
        except RequestCancelled:
            logger.debug("Load for generation %d cancelled", ticket.generation)
            return False
        except FetchError as e:
            logger.error(f"Error loading data: {e.message}")
            return self.fail_load(ticket, e)
        return self.complete_load(ticket, payload)

    retry = refresh

    def begin_load(self) -> Optional[LoadTicket]:
        with self._lock:
            if not self.selected_company or not self.selected_metric:
                return None
            self._invalidate()
            ticket = LoadTicket(
                generation=self._generation,
                company=self.selected_company,
                metric=self.selected_metric,
                token=CancellationToken(),
            )
            self._ticket = ticket
            self.is_loading = True
            self.error = None
            return ticket

    def is_current(self, ticket: LoadTicket) -> bool:
        with self._lock:
            return ticket.generation == self._generation and not ticket.token.cancelled

    def complete_load(self, ticket: LoadTicket, payload: SeriesPayload) -> bool:
        with self._lock:
            if not self.is_current(ticket):
                logger.debug("Discarding stale result for generation %d", ticket.generation)
                return False
            self.points = sorted(payload.points, key=lambda p: p.year)
            if payload.ticker:
                self.ticker = payload.ticker
            self.is_loading = False
            self.last_updated = self._clock()
            self._ticket = None
            return True

    def fail_load(self, ticket: LoadTicket, error: FetchError) -> bool:
        with self._lock:
            if not self.is_current(ticket):
                logger.debug("Discarding stale error for generation %d", ticket.generation)
                return False
            self.error = error.message
            self.points = []
            self.is_loading = False
            self._ticket = None
            return True

    # ------------------------------------------------------------------ #
    # Internal
    # ------------------------------------------------------------------ #
    def _invalidate(self) -> None:
        self._generation += 1
        if self._ticket is not None:
            self._ticket.token.cancel()
            self._ticket = None

    def _clear_series(self) -> None:
        self.points = []
        self.ticker = ""
        self.error = None
        self.is_loading = False
