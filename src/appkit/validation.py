r"""Parameter validation utilities.

This module provides validation functions for the client and retry
parameters to ensure they meet the required constraints before being
used.
"""

from __future__ import annotations

__all__ = ["HTTP_METHODS", "validate_method", "validate_retry_params", "validate_timeout"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from appkit.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    jitter_factor: float = 0.0,
    max_wait_time: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts. Must be >= 0.
            A value of 0 means no retries (only the initial attempt).
        jitter_factor: Factor for adding random jitter to backoff delays.
            Must be >= 0.
        max_wait_time: Maximum backoff delay cap in seconds.
            Must be > 0 if provided.

    Raises:
        ValueError: If a parameter is out of range.
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)
    if max_wait_time is not None and max_wait_time <= 0:
        msg = f"max_wait_time must be > 0, got {max_wait_time}"
        raise ValueError(msg)


def validate_method(method: str) -> str:
    """Validate an HTTP method name and return it upper-cased.

    Args:
        method: The HTTP method name, in any case.

    Returns:
        The upper-cased method name.

    Raises:
        ValueError: If the method is not one of GET, POST, PUT, PATCH
            or DELETE.

    Example:
        ```pycon
        >>> from appkit.validation import validate_method
        >>> validate_method("get")
        'GET'

        ```
    """
    normalized = method.upper()
    if normalized not in HTTP_METHODS:
        msg = f"method must be one of {HTTP_METHODS}, got {method!r}"
        raise ValueError(msg)
    return normalized
