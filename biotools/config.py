"""
Centralized settings using Pydantic Settings.

Controls:
- App metadata and API prefix
- Default scoring (match/mismatch scores, gap penalties)
- Default rendering line width
- Server host/port and log level

Every value can be overridden with a BIOTOOLS_* environment variable or a
.env file in the working directory.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- App ---
    APP_NAME: str = "biotools"
    APP_VERSION: str = "0.4.0"
    API_PREFIX: str = "/api"

    # --- Scoring ---
    MATCH_SCORE: int = 1
    MISMATCH_SCORE: int = -1
    GAP_OPEN: int = 2  # user-facing penalties, negated before alignment
    GAP_EXTEND: int = 1
    MAX_CANDIDATES: int = 1000  # co-optimal alignments inspected per run

    # --- Rendering ---
    LINE_WIDTH: int = 60

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "warning"

    model_config = SettingsConfigDict(
        env_prefix="BIOTOOLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
