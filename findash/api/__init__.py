"""API routers (FastAPI)."""
