from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# app/core/config.py -> app/core -> app
APP_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    PORT: int = 8000
    APP_NAME: str = "Moodmatch"
    APP_ENV: Literal["development", "production"] = "production"
    LOG_LEVEL: str = "INFO"

    # Mood catalog
    MOOD_PROFILES_PATH: Path = APP_DIR / "data" / "mood_profiles.csv"
    # Catalog row returned when no profile qualifies (synthesized if absent)
    FALLBACK_PROFILE_LABEL: str = "Neutral Balance"
    # Scores below this are treated as absent. 0 disables the filter.
    EMOTION_NOISE_THRESHOLD: float = 0.0
    # Build an "Emotion Drift" profile from the dominant emotion instead of the neutral fallback
    DRIFT_FALLBACK_ENABLED: bool = False


settings = Settings()
