"""Configuration management for hireflow."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    debug: bool = Field(False, description="Enable debug mode")
    log_level: str = Field("INFO", description="Logging level")

    # Matching Configuration
    default_scorer: str = Field("tfidf", description="Match scorer used at intake (tfidf/keyword)")

    # Bot Configuration
    bot_token: Optional[str] = Field(None, description="Internal credential carried by scheduled bot runs")
    bot_reject_below: int = Field(10, description="Applied applications scoring below this are rejected")
    bot_interview_min_score: int = Field(25, description="Minimum score to move Reviewed to Interview")
    bot_offer_bias: int = Field(20, description="Added to the score to form the offer threshold")
    bot_offer_cap: int = Field(90, description="Upper bound of the offer threshold")

    # Statistics Configuration
    stats_window_hours: int = Field(24, description="Window for recent bot activity")
    activity_feed_limit: int = Field(20, description="Bot history entries shown in the activity feed")


# Global settings instance
settings = Settings()
