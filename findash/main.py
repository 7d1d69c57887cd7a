"""
main.py — FastAPI Application Entrypoint

Purpose:
- Initialize application services (logging, file log sink, exception hooks).
- Register API routers.
- Define root-level health/status endpoint.
- Provide `app` object used by the ASGI server (uvicorn) and `run()` for the
  `findash-server` console script.

This file should stay clean — no business logic here.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from findash.api import companies, data, metrics
from findash.api.errors import register_exception_handlers
from findash.core.config import settings
from findash.core.logging import LogFileSink, configure_logging, get_logger, install_exception_hooks

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# Lifespan
# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    sink = LogFileSink(settings.LOG_FILE)
    sink.open()
    install_exception_hooks()
    logger.info(f"Backend server started and listening on http://{settings.HOST}:{settings.PORT}")
    try:
        yield
    finally:
        logger.info("Backend server shutting down")
        sink.close()

# -----------------------------------------------------------------------------
# App Initialization
# -----------------------------------------------------------------------------

app = FastAPI(
    title="FinDash API",
    description="Per-company financial metrics for the FinDash dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# -----------------------------------------------------------------------------
# Router Registration
# -----------------------------------------------------------------------------

app.include_router(companies.router, prefix="/api")
app.include_router(metrics.router, prefix="/api")
app.include_router(data.router, prefix="/api")

# -----------------------------------------------------------------------------
# Health Check
# -----------------------------------------------------------------------------

@app.get("/")
def root():
    return {"status": "ok", "message": "FinDash backend running"}


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
