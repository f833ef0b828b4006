"""Main FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinic import __version__
from clinic.api import gifts, patients
from clinic.api.endpoints import router as service_router
from clinic.api.errors import register_exception_handlers
from clinic.config import get_settings
from clinic.utils.logging import LogConfig, get_logger, setup_logging

settings = get_settings()
setup_logging(LogConfig(level=settings.log_level))

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared outbound HTTP client for the application's lifetime."""
    async with httpx.AsyncClient(timeout=settings.gifts_timeout_seconds) as http_client:
        app.state.http_client = http_client
        logger.info(f"Clinic API started, patients file: {settings.patients_file}")
        yield


# Create FastAPI application
app = FastAPI(
    title="Clinic Management API",
    description="A Web API for managing patients in a clinic.",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Patients", "description": "Create, read, update and delete patient records."},
        {"name": "Gifts", "description": "Gifts for patients, fetched from an external service."},
        {"name": "Health", "description": "Service health monitoring and status checks."},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(patients.router)
app.include_router(gifts.router)
app.include_router(service_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("clinic.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
