"""
client package — Python consumer of the FinDash API.

Expose the high-level client and session so scripts can import without
touching the fetch helpers directly.
"""

from .dashboard_client import ClientSettings, DashboardClient  # noqa: F401
from .fetch import FetchError, RequestCancelled  # noqa: F401
from .session import DashboardSession  # noqa: F401
