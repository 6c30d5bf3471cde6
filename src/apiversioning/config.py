"""
Centralized configuration for apiversioning.

Uses Pydantic BaseSettings for environment variable integration
and validation. All configurable values should be defined here.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (APIVERSIONING_*)
3. .env file
4. Default values

Example:
    from apiversioning.config import get_config

    config = get_config()
    print(config.projection_name)  # From APIVERSIONING_PROJECTION_NAME or "v"

    # Override at runtime
    config = get_config(strict_dependencies=True)
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class VersioningConfig(BaseSettings):
    """
    Central configuration for apiversioning.

    All settings can be overridden via environment variables
    prefixed with APIVERSIONING_.

    Example:
        export APIVERSIONING_LOG_LEVEL=debug
        export APIVERSIONING_STRICT_DEPENDENCIES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="APIVERSIONING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Logging level for apiversioning",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format (json for log pipelines, text for console)",
    )

    # Projection
    projection_name: str = Field(
        default="v",
        min_length=1,
        description="Projection name carried by every emitted projection application",
    )

    # Telemetry
    emit_span_events: bool = Field(
        default=True,
        description="Emit OTel span events for resolutions and diagnostics",
    )

    # Resolution
    strict_dependencies: bool = Field(
        default=False,
        description=(
            "Treat a dependency mapping with no entry for a root version as a "
            "fatal consistency error instead of a diagnostic"
        ),
    )

    @field_validator("projection_name")
    @classmethod
    def strip_projection_name(cls, v: str) -> str:
        """Reject whitespace-only projection names."""
        v = v.strip()
        if not v:
            raise ValueError("projection_name must not be blank")
        return v


# Global singleton
_config: Optional[VersioningConfig] = None


def get_config(**overrides) -> VersioningConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        VersioningConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = VersioningConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None


class _JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(config: Optional[VersioningConfig] = None) -> logging.Logger:
    """Attach a stderr handler to the ``apiversioning`` logger.

    Idempotent: an existing handler installed by a previous call is
    replaced, so level and format changes take effect.

    Returns:
        The configured package logger.
    """
    config = config or get_config()
    root = logging.getLogger("apiversioning")
    root.setLevel(config.log_level.upper())

    for handler in list(root.handlers):
        if getattr(handler, "_apiversioning", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    if config.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )
    handler._apiversioning = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
