# src/scoregate/models/__init__.py
"""SQLAlchemy models for the score gate service."""

from .logo_tap import LogoTap
from .player_score import PlayerScore

__all__ = ["LogoTap", "PlayerScore"]
