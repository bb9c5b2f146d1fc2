"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API runs out of the box in development mode against a seeded
in‑memory catalog.  Tests and embedding code may construct their own
``Settings`` instance and pass it to ``create_app``.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # ``Development`` exposes the interactive documentation.  Any other
    # value is treated as production: docs are hidden and HSTS plus the
    # HTTPS redirect are switched on.
    environment: str = os.getenv("ENVIRONMENT", "Development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Name of the shared in‑memory SQLite database.  Stores opened with
    # the same name inside one process see the same data.
    database_name: str = os.getenv("DATABASE_NAME", "Shop")
    seed_database: bool = _env_flag("SEED_DATABASE", "true")

    # API versioning.  The version readers are consulted in the order
    # query string, header, media type parameter.
    default_api_version: str = os.getenv("DEFAULT_API_VERSION", "1.0")
    api_version_query_param: str = "api-version"
    api_version_header: str = "X-API-Version"
    api_version_media_type_param: str = "ver"

    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "50"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

    hsts_max_age_days: int = int(os.getenv("HSTS_MAX_AGE_DAYS", "365"))
    https_redirect: bool = _env_flag("HTTPS_REDIRECT", "true")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes defaults at class definition time, environment variables
# must be set before importing this module.
settings = Settings()
