"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./trivia.db")

    # Application
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:5000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    VERSION: str = "1.0.0"

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
    ]

    # Sessions and cookies
    SESSION_COOKIE_NAME: str = "sessionId"
    PARTICIPANT_COOKIE_NAME: str = "participantToken"
    SESSION_TTL_HOURS: int = 24
    COOKIE_SECURE: bool = False

    # Path prefixes (lower-case) guarded by the admin middleware
    ADMIN_PATH_PREFIXES: List[str] = ["/api/admin", "/api/eventimages/admin"]

    # OpenAI
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 2000

    # Unsplash
    UNSPLASH_ACCESS_KEY: str | None = os.getenv("UNSPLASH_ACCESS_KEY")
    UNSPLASH_BASE_URL: str = "https://api.unsplash.com"
    UNSPLASH_TIMEOUT_SECONDS: float = 30.0
    IMAGE_CACHE_DAYS: int = 30

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        env_file = ".env"

settings = Settings()
