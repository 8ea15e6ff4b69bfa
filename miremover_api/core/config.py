"""Application configuration from environment."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "MiRemover API"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str = "sqlite+aiosqlite:///./miremover.db"

    # Static API key shared with the desktop client
    api_key: str = "test"

    # Token signing secret (reserved, no route issues tokens yet)
    jwt_secret: str = "test"

    cors_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    return Settings()
