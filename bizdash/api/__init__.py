"""
Business dashboard API package initialization.

This package contains FastAPI router modules for the dashboard backend:
- dashboard: Derived metrics for the dashboard page (KPIs, funnel, timelines,
  heatmap, pipeline, revenue breakdown, proposals, alerts, milestones, export)
"""

from fastapi import APIRouter

from bizdash.api.dashboard import router as dashboard_router

# Create main API router
api_router = APIRouter()

api_router.include_router(dashboard_router, tags=["dashboard"])  # dashboard router has its own prefix

__all__ = [
    "api_router",
    "dashboard_router",
]
