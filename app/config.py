# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./data/parking.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Pricing ───────────────────────────────────────────────────────────
    DEFAULT_RATE_PER_HOUR: float = 0.25     # Used when no pricing tier resolves

    # ── Capacity alerts (percent) ─────────────────────────────────────────
    CAPACITY_ALERT_THRESHOLD: int = 80
    CAPACITY_ALERT_HIGH_THRESHOLD: int = 90

    # ── Statistics ────────────────────────────────────────────────────────
    DEFAULT_STATS_HOUR: int = 10
    RECENT_ACTIVITY_LIMIT: int = 10

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
