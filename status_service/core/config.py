"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Order Status Service"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./status_service.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    admin_user: str = getenv("ADMIN_USER", "")
    admin_pass: str = getenv("ADMIN_PASS", "")
    log_level: str = getenv("LOG_LEVEL", "INFO")
    max_preparation_minutes: int = int(getenv("MAX_PREPARATION_MINUTES", "240"))
    clock_skew_seconds: int = int(getenv("CLOCK_SKEW_SECONDS", "120"))


settings: Settings = Settings()
