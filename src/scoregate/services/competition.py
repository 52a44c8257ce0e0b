"""Read-only view of the competition state file.

The file is maintained by the admin tooling; this service only reports it.
A missing or unreadable file means the competition is open.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

__all__ = ["CompetitionState", "load_competition_state"]

logger = logging.getLogger(__name__)


class CompetitionState(BaseModel):
    """Whether scores are currently being collected, with epoch-ms bounds."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    open: bool = True
    started_at: int | None = Field(None, alias="startedAt")
    ended_at: int | None = Field(None, alias="endedAt")


def load_competition_state(path: str | Path) -> CompetitionState:
    state_file = Path(path)
    try:
        raw = state_file.read_text(encoding="utf-8")
    except FileNotFoundError:
        return CompetitionState()
    except OSError as exc:
        logger.warning("Could not read competition state %s: %s", state_file, exc)
        return CompetitionState()

    try:
        return CompetitionState.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Ignoring malformed competition state %s: %s", state_file, exc)
        return CompetitionState()
