"""
HeadlineCheck Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    VERSION: str = "1.0.0"
    API_VERSION: str = "1"

    # --- Headline Log ---
    LOG_PATH: str = os.getenv("HEADLINECHECK_LOG_PATH", "headline_logs.csv")

    # --- Application Logging ---
    LOG_LEVEL: str = os.getenv("HEADLINECHECK_LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv("HEADLINECHECK_LOG_FORMAT", "json")  # "json" or "text"

    # --- Server ---
    HOST: str = os.getenv("HEADLINECHECK_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("HEADLINECHECK_PORT", "4000"))
    MAX_BODY_BYTES: int = int(os.getenv("HEADLINECHECK_MAX_BODY_BYTES", "65536"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("HEADLINECHECK_CORS_ORIGINS", "*")

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from the comma-separated setting."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
