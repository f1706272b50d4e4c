r"""Validation of the process environment.

The environment is validated once, at process start, and the resulting
``EnvSettings`` instance is handed to whatever needs it (see
``appkit.toolkit``) instead of being read from a module-level global.
"""

from __future__ import annotations

__all__ = ["Environment", "EnvSettings", "load_env"]

import logging
from typing import Any, Literal

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from appkit.exceptions import EnvValidationError

logger: logging.Logger = logging.getLogger(__name__)

Environment = Literal["development", "staging", "production", "testing"]


class EnvSettings(BaseSettings):
    """Settings read from environment variables (and an optional ``.env``
    file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    ENVIRONMENT: Environment


def load_env(env_file: str | None = ".env", **overrides: Any) -> EnvSettings:
    """Validate the environment and return the settings.

    Args:
        env_file: Path of the dotenv file to read, or ``None`` to read
            the process environment only. A missing file is ignored.
        **overrides: Values taking precedence over the environment.

    Returns:
        The validated settings.

    Raises:
        EnvValidationError: If a variable is missing or invalid. The
            pydantic error is chained as ``__cause__``.

    Example:
        ```pycon
        >>> from appkit.env import load_env
        >>> load_env(env_file=None, ENVIRONMENT="staging").ENVIRONMENT
        'staging'

        ```
    """
    try:
        settings = EnvSettings(_env_file=env_file, **overrides)
    except ValidationError as exc:
        raise EnvValidationError(str(exc)) from exc
    logger.debug(f"Loaded environment settings: ENVIRONMENT={settings.ENVIRONMENT}")
    return settings
