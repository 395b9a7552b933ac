"""Configuration settings for the booking service."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Booking Service")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./booking.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "changeme")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    DEFAULT_SLOT_DURATION_MINUTES: int = int(
        os.getenv("DEFAULT_SLOT_DURATION_MINUTES", "60")
    )
    DEFAULT_SEARCH_RADIUS_METERS: float = float(
        os.getenv("DEFAULT_SEARCH_RADIUS_METERS", "10000")
    )
    ETA_SPEED_KMH: float = float(os.getenv("ETA_SPEED_KMH", "30"))
    PUSH_SERVICE_URL: str = os.getenv("PUSH_SERVICE_URL", "")
    PUSH_SERVICE_TIMEOUT: float = float(os.getenv("PUSH_SERVICE_TIMEOUT", "10"))


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
