"""Environment-driven settings for the GraphQL Lambda function."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse a boolean environment value.

    Args:
        value: The raw environment value, or None when unset.
        default: Value returned when the variable is unset or empty.

    Returns:
        True for 1/true/yes/on (case-insensitive), False otherwise.
    """
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


def parse_origins(value: Optional[str]) -> tuple[str, ...]:
    """Split a comma-separated origin list, dropping empty entries."""
    if not value:
        return ()
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Settings read from the Lambda environment."""

    log_level: str = "INFO"
    graphiql_enabled: bool = True
    pretty_json: bool = False
    dgraph_host: Optional[str] = None
    cors_allowed_origins: tuple[str, ...] = ()
    app_version: str = "unknown"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            log_level=os.getenv("LOG_LEVEL") or "INFO",
            graphiql_enabled=parse_bool(os.getenv("GRAPHIQL_ENABLED"), default=True),
            pretty_json=parse_bool(os.getenv("PRETTY_JSON")),
            dgraph_host=os.getenv("DGRAPH") or None,
            cors_allowed_origins=parse_origins(os.getenv("CORS_ALLOWED_ORIGINS")),
            app_version=os.getenv("APP_VERSION", "unknown"),
        )
