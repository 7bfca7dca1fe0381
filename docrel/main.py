# Main application entry point

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import Response
import uvicorn

from docrel import __version__
from docrel.api.routes import router
from docrel.common.logging_config import setup_logging
from docrel.common.metrics import get_metrics, get_metrics_content_type
from docrel.config.settings import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    setup_logging(settings.log_level, json_format=settings.json_logs)
    logger.info("docrel %s started, catalog at %s", __version__, settings.database_url)
    yield


app = FastAPI(
    title="docrel",
    description="Relational schema inference for semi-structured documents",
    version=__version__,
    lifespan=lifespan
)

app.include_router(router, prefix="/api/v1")


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}


@app.get("/ready")
def readiness():
    """Readiness check endpoint"""
    from docrel.catalog.database import check_database_connection

    db_healthy = check_database_connection()

    return {
        "status": "ready" if db_healthy else "not_ready",
        "database": "connected" if db_healthy else "disconnected"
    }


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint"""
    return Response(content=get_metrics(), media_type=get_metrics_content_type())


if __name__ == "__main__":
    uvicorn.run(
        "docrel.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug
    )
