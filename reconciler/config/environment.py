"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Credentials and overrides read from the environment."""

    def __init__(
        self,
        rapidapi_key: str,
        supabase_service_key: str,
        supabase_url: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.rapidapi_key = rapidapi_key
        self.supabase_service_key = supabase_service_key
        self.supabase_url = supabase_url
        self.log_level = log_level

    def __repr__(self) -> str:
        # Credentials are never rendered
        return (
            f"EnvironmentConfig(supabase_url={self.supabase_url!r}, "
            f"log_level={self.log_level!r})"
        )


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required environment variables:
    - RAPIDAPI_KEY: RapidAPI key for the JSearch job search API
    - SUPABASE_SERVICE_KEY: Service key for the reference company store

    Optional environment variables:
    - SUPABASE_URL: Overrides reference_store.url from the config file
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    rapidapi_key = (os.getenv("RAPIDAPI_KEY") or "").strip()
    supabase_service_key = (os.getenv("SUPABASE_SERVICE_KEY") or "").strip()
    supabase_url = (os.getenv("SUPABASE_URL") or "").strip() or None
    log_level = (os.getenv("LOG_LEVEL") or "").strip() or None

    if not rapidapi_key:
        errors.append("Missing required environment variable: RAPIDAPI_KEY")

    if not supabase_service_key:
        errors.append("Missing required environment variable: SUPABASE_SERVICE_KEY")

    if supabase_url and not supabase_url.startswith(("http://", "https://")):
        errors.append(f"Invalid SUPABASE_URL: '{supabase_url}'. Must start with http:// or https://")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Ensure RAPIDAPI_KEY and SUPABASE_SERVICE_KEY are set",
            ],
        )

    return EnvironmentConfig(
        rapidapi_key=rapidapi_key,
        supabase_service_key=supabase_service_key,
        supabase_url=supabase_url.rstrip("/") if supabase_url else None,
        log_level=log_level,
    )
