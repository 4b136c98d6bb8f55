"""API routers package."""

from sims_api.routers import analytics, auth, evaluations

__all__ = [
    "analytics",
    "auth",
    "evaluations",
]
