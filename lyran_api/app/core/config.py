"""
Configuration for the Lyran booking API.

``Settings`` is a plain dataclass that reads its defaults from
environment variables.  A module level ``settings`` instance serves as
the process default, but ``create_app`` and ``BookingService`` accept
an explicit ``Settings`` so tests and alternative deployments can pass
their own values.

Leaving ``DATABASE_URL`` empty runs the API without a booking store:
bookings are still priced and answered but nothing is saved, and the
availability endpoint reports every day as free.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Lyran API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    service_name: str = os.getenv("SERVICE_NAME", "lyran-api")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.  Empty disables
    # persistence altogether.
    database_url: str = os.getenv("DATABASE_URL", "")

    # Swish number shown to customers who must pay for a game slot.
    swish_number: str = os.getenv("SWISH_NUMBER", "123 456 78 90")

    # Comma separated list of allowed CORS origins, ``*`` for any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    @property
    def store_configured(self) -> bool:
        return bool(self.database_url.strip())

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Environment variables must be set before this module is imported.
settings = Settings()
