"""
findash — Financial metrics dashboard: JSON API over an embedded per-company
dataset, plus the Python client, session state and chart renderer that consume it.
"""

__version__ = "0.1.0"
