"""Service configuration.

All settings come from environment variables (optionally via a .env file)
and are gathered once into a Settings instance that is passed explicitly
to create_app().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "VIDEO_CATALOG_"

DEFAULT_DATABASE_URL = "sqlite:///data/video_catalog.db"
DEFAULT_JWT_SECRET = "dev-secret-change-me"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

_TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _parse_bool(value: str | None) -> bool:
    return value is not None and value.lower() in _TRUTHY


def _parse_positive_int(name: str, value: str | None) -> int | None:
    if value is None:
        return None
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {ENV_PREFIX}{name}={value!r}")
        return None
    if parsed < 1:
        logger.warning(f"Ignoring non-positive {ENV_PREFIX}{name}={value!r}")
        return None
    return parsed


@dataclass
class Settings:
    """Runtime settings for the catalog service."""

    database_url: str = DEFAULT_DATABASE_URL
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    debug: bool = False
    max_page_limit: int | None = None
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Settings:
        """Build settings from the environment.

        Args:
            dotenv_path: Optional .env file to load first. Existing
                environment variables take precedence.

        Returns:
            Populated Settings.

        Raises:
            ValueError: If the JWT secret is unset and debug is off.
        """
        load_dotenv(dotenv_path, override=False)

        debug = _parse_bool(_env("DEBUG"))
        jwt_secret = _env("JWT_SECRET")
        if jwt_secret is None:
            if not debug:
                raise ValueError(
                    f"{ENV_PREFIX}JWT_SECRET must be set unless {ENV_PREFIX}DEBUG is on"
                )
            logger.warning(f"{ENV_PREFIX}JWT_SECRET not set, using development secret")
            jwt_secret = DEFAULT_JWT_SECRET

        origins = _env("CORS_ORIGINS")

        return cls(
            database_url=_env("DATABASE_URL", DEFAULT_DATABASE_URL),
            jwt_secret=jwt_secret,
            jwt_algorithm=_env("JWT_ALGORITHM", "HS256"),
            debug=debug,
            max_page_limit=_parse_positive_int("MAX_PAGE_LIMIT", _env("MAX_PAGE_LIMIT")),
            cors_origins=(
                [o.strip() for o in origins.split(",") if o.strip()]
                if origins
                else list(DEFAULT_CORS_ORIGINS)
            ),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )
