"""
Pydantic schemas for API request models.

Fields are deliberately loose; the services perform validation so that every
failure maps onto a named rejection code.
"""

from .analytics import LogoTapReport
from .scores import RegistrationRequest, ScoreSubmission, SessionRequest

__all__ = ["LogoTapReport", "RegistrationRequest", "ScoreSubmission", "SessionRequest"]
