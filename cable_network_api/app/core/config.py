"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts in a development environment without any setup.  In a
production deployment override at least ``JWT_SECRET``,
``DATABASE_URL`` and ``CLOUDINARY_CLOUD_NAME``.
"""

import os
from dataclasses import dataclass, field
from typing import List


_DEFAULT_CORS_ORIGINS = ",".join(
    [
        "http://localhost:3000",
        "https://cable-net-client.vercel.app",
        "https://cable-net-fe.vercel.app",
    ]
)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Cable Network Management API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file written in addition to the console.
    log_file: str = os.getenv("LOG_FILE", "")

    # Shared HMAC secret for signing bearer tokens.
    secret_key: str = os.getenv("JWT_SECRET", "cable_network_secret_key_2024")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Path to the SQLite database file.  Relative paths are resolved
    # against the package root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "cable_network.db")

    # Image URLs attached to locations must live on this CDN host, under
    # the ``/<cloud name>/`` path prefix.
    cdn_host: str = os.getenv("CDN_HOST", "res.cloudinary.com")
    cloud_name: str = os.getenv("CLOUDINARY_CLOUD_NAME", "")

    cors_origins: List[str] = field(
        default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", _DEFAULT_CORS_ORIGINS))
    )

    # Credentials of the administrator created on first start.
    default_admin_username: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
    default_admin_password: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
