"""Application settings and configuration.

This module defines all configuration options for the score gate service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Score Gate", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")

    # Database configuration
    database_url: str = Field(default="sqlite:///./scores.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    sync_on_boot: bool = Field(default=True, alias="SYNC_ON_BOOT")

    # Session tokens
    session_ttl_seconds: float = Field(default=30 * 60, alias="SESSION_TTL_SECONDS")
    session_grace_seconds: float = Field(default=2 * 60, alias="SESSION_GRACE_SECONDS")
    session_sweep_interval_seconds: float = Field(
        default=10 * 60,
        alias="SESSION_SWEEP_INTERVAL_SECONDS",
    )

    # Per-device submission cooldown (shortest real game is ~28s)
    rate_limit_cooldown_seconds: float = Field(default=25, alias="RATE_LIMIT_COOLDOWN_SECONDS")
    rate_limit_prune_threshold: int = Field(default=500, alias="RATE_LIMIT_PRUNE_THRESHOLD")
    rate_limit_prune_slack_seconds: float = Field(
        default=5,
        alias="RATE_LIMIT_PRUNE_SLACK_SECONDS",
    )

    # Score validation
    score_ceiling: int = Field(default=9999, alias="SCORE_CEILING")
    max_player_name_length: int = Field(default=32, alias="MAX_PLAYER_NAME_LENGTH")
    max_device_id_length: int = Field(default=64, alias="MAX_DEVICE_ID_LENGTH")
    max_contact_length: int = Field(default=128, alias="MAX_CONTACT_LENGTH")

    # Leaderboard listing
    leaderboard_default_limit: int = Field(default=500, alias="LEADERBOARD_DEFAULT_LIMIT")
    leaderboard_max_limit: int = Field(default=1000, alias="LEADERBOARD_MAX_LIMIT")

    # Logo tap analytics
    max_brand_length: int = Field(default=32, alias="MAX_BRAND_LENGTH")
    max_reported_taps: int = Field(default=1_000_000, alias="MAX_REPORTED_TAPS")

    # Competition state, written by an external admin tool
    competition_state_file: str = Field(
        default="competition.json",
        alias="COMPETITION_STATE_FILE",
    )

    # CORS configuration for the game client
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()
