"""Score-related Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from scoregate.services.validation import ScoreClaim


class _ClientPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SessionRequest(_ClientPayload):
    """Schema for starting a game session."""

    device_id: Any = Field(None, alias="deviceId")


class ScoreSubmission(_ClientPayload):
    """Schema for submitting a finished game's score."""

    device_id: Any = Field(None, alias="deviceId")
    player_name: Any = Field(None, alias="playerName")
    score: Any = None
    mode: Any = Field(None, description="'solo' (default) or 'versus'")
    contact: Any = None
    session_id: Any = Field(None, alias="sessionId")

    def to_claim(self) -> ScoreClaim:
        return ScoreClaim(
            device_id=self.device_id,
            player_name=self.player_name,
            score=self.score,
            mode=self.mode,
            contact=self.contact,
            session_id=self.session_id,
        )


class RegistrationRequest(_ClientPayload):
    """Schema for claiming a player name before playing."""

    device_id: Any = Field(None, alias="deviceId")
    player_name: Any = Field(None, alias="playerName")
    contact: Any = None
