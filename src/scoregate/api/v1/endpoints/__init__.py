"""API endpoint modules for version 1."""

from .analytics import router as analytics_router
from .competition import router as competition_router
from .scores import router as scores_router

__all__ = ["analytics_router", "competition_router", "scores_router"]
