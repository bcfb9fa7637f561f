"""
Configuration settings using Pydantic
Loads environment variables from .env file
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    """Application settings"""

    # Server configuration
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    DEBUG: bool = Field(default=False, description="Debug mode")
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    # Rule tables
    RULES_FILE: Optional[str] = Field(
        default=None,
        description="Optional JSON file whose entries extend the built-in rule tables"
    )

    # Caller-held history
    HISTORY_SIZE: int = Field(default=10, description="Number of recent results kept in memory")
    HISTORY_PREVIEW_LENGTH: int = Field(default=50, description="Characters of content kept per history entry")

    # Input limits (enforced by callers before invoking the engine)
    MAX_EMAIL_LENGTH: int = Field(default=50000, description="Maximum email content length")
    MAX_URL_LENGTH: int = Field(default=2048, description="Maximum URL length")

    # API configuration
    RATE_LIMIT: str = Field(default="60/minute", description="Per-client rate limit for analysis routes")

    @property
    def SERVER_URL(self) -> str:
        """Get the server URL"""
        return f"http://{self.HOST if self.HOST != '0.0.0.0' else 'localhost'}:{self.PORT}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env file


# Global settings instance
settings = Settings()
