# src/scoregate/services/__init__.py
"""Business logic services for score submission."""

from .analytics import TapCounter
from .competition import CompetitionState, load_competition_state
from .maintenance import MaintenanceWorker
from .merge import ScoreMerger
from .pipeline import SubmissionPipeline, SubmissionResult, build_pipeline
from .rate_limit import SubmissionRateLimiter
from .sessions import SessionTokenRegistry
from .validation import ScoreClaim, ScoreValidator

__all__ = [
    "CompetitionState",
    "MaintenanceWorker",
    "ScoreClaim",
    "ScoreMerger",
    "ScoreValidator",
    "SessionTokenRegistry",
    "SubmissionPipeline",
    "SubmissionResult",
    "SubmissionRateLimiter",
    "TapCounter",
    "build_pipeline",
    "load_competition_state",
]
