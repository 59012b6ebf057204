"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    APP_NAME: str = "TaskFlow"
    DEBUG: bool = False
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:5000",
        "http://localhost:3000",
    ]

    # Auth
    JWT_SECRET: str = "your-secret-key"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_MINUTES: int = 60 * 24

    # Demo seed
    SEED_DEMO_DATA: bool = True
    DEMO_PASSWORD: str = "password123"

    # Analytics placeholders (not derived from stored data)
    ANALYTICS_AVG_COMPLETION_TIME: float = 2.4
    ANALYTICS_TEAM_PRODUCTIVITY: int = 94
    INSIGHTS_FOCUS_TIME: str = "6.2h"
    INSIGHTS_COMPLETION_RATE: int = 87
    INSIGHTS_TEAM_VELOCITY: int = 23
    INSIGHTS_BEST_WORK_HOURS: str = "10-12 AM"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
