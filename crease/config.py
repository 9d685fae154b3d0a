"""
Settings from environment variables
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Runtime settings, read once at import"""

    # Use /app/data in Docker, current dir otherwise
    DATABASE_PATH: str = os.getenv("DATABASE_PATH", "crease.db")
    LOG_LEVEL: str = os.getenv("CREASE_LOG_LEVEL", "INFO").upper()

    # Defaults for the CLI and API when a request does not choose
    DEFAULT_FORMAT: str = os.getenv("CREASE_DEFAULT_FORMAT", "test")
    DEFAULT_MODEL: str = os.getenv("CREASE_DEFAULT_MODEL", "naive")

    # Extra CORS origins, comma-separated
    CORS_ORIGINS: list = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

    SQUAD_SIZE: int = 11


settings = Settings()
