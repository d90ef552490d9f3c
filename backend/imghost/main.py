"""
FastAPI application entry point.
Local API the desktop shell starts and the front end calls for uploads.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from imghost import __version__
from imghost.api.router import api_router
from imghost.config import settings
from imghost.middleware.metrics_middleware import MetricsMiddleware
from imghost.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure structured JSON logging on startup."""
    configure_logging('imghost', settings.log_level)
    yield


# Docs UI is the debugging surface; DEVTOOLS is read once here
env_config = {
    "lifespan": lifespan,
    "docs_url": "/docs" if settings.docs_enabled else None,
    "redoc_url": "/redoc" if settings.docs_enabled else None,
    "openapi_url": "/openapi.json" if settings.docs_enabled else None,
}

app = FastAPI(
    title="imghost",
    description="Uploads images to Cloudflare R2 and Aliyun OSS for the desktop editor",
    version=__version__,
    **env_config
)

# CORS middleware (front end runs on its own origin, e.g. tauri://localhost)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(MetricsMiddleware)

app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "imghost",
        "version": __version__,
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
