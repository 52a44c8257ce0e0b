"""Session-gated, exactly-once leaderboard score submission service."""
