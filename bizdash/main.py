"""
FastAPI application entry point for the Business Dashboard API.

This module configures logging and CORS, registers the API routers and starts
the ASGI server when executed directly.

The API is stateless: every request carries the record snapshot it is computed
from, so startup and shutdown hold no resources.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizdash.api import api_router
from bizdash.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    Logs the active derivation settings on startup so a deployment's thresholds
    are visible in its logs.
    """
    # Startup
    logger.info(f"{settings.app_name} {settings.app_version} starting")
    logger.info(
        f"Derivation settings: heatmap_saturation_count={settings.heatmap_saturation_count}, "
        f"milestone_due_soon_days={settings.milestone_due_soon_days}, "
        f"overdue_high_priority_days={settings.overdue_high_priority_days}, "
        f"overdue_medium_priority_days={settings.overdue_medium_priority_days}"
    )

    yield

    # Shutdown
    logger.info(f"{settings.app_name} shutting down")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Derived metrics for the business dashboard. "
        "Provides KPIs, client funnel, project and revenue timelines, "
        "sector heatmap, pipeline proportions, alerts and milestones."
    ),
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    """
    Root endpoint providing API information.

    Returns:
        Dict with API name and version
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bizdash.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
