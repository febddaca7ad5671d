"""
Business Dashboard Backend Package.

FastAPI service layer for the business-management dashboard (clients, projects,
subscriptions, proposals, alerts, milestones). Derives KPI cards, funnel,
timeline, heatmap and pipeline view models from caller-supplied record snapshots.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - models: Pydantic schemas and enums
    - services: Metric derivation functions
"""

__version__ = "1.0.0"
