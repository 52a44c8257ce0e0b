"""Version 1 API endpoints."""

from .endpoints import analytics_router, competition_router, scores_router

__all__ = ["analytics_router", "competition_router", "scores_router"]
