from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Server shell configuration settings."""

    # Application
    APP_NAME: str = "shellserve"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Lifecycle
    SHUTDOWN_TIMEOUT_SECONDS: float = 15.0  # In-flight requests past this are abandoned
    STARTUP_TIMEOUT_SECONDS: float = 5.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_COLOR: bool = True  # ANSI status colors in the request log

    # Templates
    TEMPLATE_DIR: str = str(PACKAGE_DIR / "templates")

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
