"""
Configuration management for the flashcard deck store
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Storage Configuration
    storage_url: str = Field(default="sqlite:///data/flashdeck.db")
    decks_key: str = Field(default="flashcard_decks")
    sessions_key: str = Field(default="review_sessions")

    # Deck Configuration
    default_deck_id: str = Field(default="default")
    default_deck_name: str = Field(default="My Vocabulary")
    session_history_limit: int = Field(default=100, ge=1)

    # Spaced Repetition Configuration
    default_ease_factor: float = Field(default=2.5)
    min_ease_factor: float = Field(default=1.3)
    mastered_repetitions: int = Field(default=5, ge=1)
    clamp_quality: bool = Field(default=False)

    # Application Configuration
    log_level: str = Field(default="INFO")

    @property
    def storage_path(self) -> str:
        """Get the storage file path from URL"""
        if self.storage_url.startswith("sqlite:///"):
            return self.storage_url.replace("sqlite:///", "", 1)
        return "data/flashdeck.db"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
