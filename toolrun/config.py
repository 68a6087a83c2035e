"""Runtime configuration loaded from environment variables.

Uses ``pydantic-settings`` for env-var loading, type coercion and ``.env``
file support. Every variable is prefixed with ``TOOLRUN_``.
"""

import logging
from functools import lru_cache

from pydantic import Field, NonNegativeInt, PositiveInt, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from toolrun.kernel.executor.errors import make_config


class Settings(BaseSettings):
    """Defaults applied to every execution unless overridden per call."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLRUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_timeout_ms: PositiveInt = 30000
    default_retry: NonNegativeInt = 0

    # Bound each attempt by its timeout. Off to match the echo-only behaviour.
    enforce_timeout: bool = False
    # Validate input against the tool's input_schema, not just its shape.
    strict_schema: bool = False

    log_level: str = Field(default="INFO")


def load_settings(**overrides: object) -> Settings:
    """Build settings from the environment plus explicit overrides.

    Raises:
        ConfigError: If any setting fails validation
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        key = ".".join(str(p) for p in first["loc"])
        raise make_config(
            f"Invalid setting {key}: {first['msg']}",
            {"key": key, "errors": e.errors(include_url=False)},
        ) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return load_settings()


def configure_logging(level: str | int | None = None) -> None:
    """Install a root handler at ``level`` (defaults to settings.log_level)."""
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    )
