r"""Parsing of the ``Retry-After`` response header (RFC 9110 §10.2.3)."""

from __future__ import annotations

__all__ = ["parse_retry_after", "retry_after_from_response"]

import logging
import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> float | None:
    """Convert a ``Retry-After`` header value to a number of seconds.

    Both forms of the header are understood: a delay in seconds
    (``"120"``) and an HTTP-date (``"Wed, 21 Oct 2015 07:28:00 GMT"``).
    Dates in the past give ``0.0``.

    Args:
        value: The raw header value, or ``None`` if the header is absent.

    Returns:
        The number of seconds to wait, or ``None`` if the header is absent
        or unparseable, in which case the regular backoff applies.

    Example:
        ```pycon
        >>> from appkit.retry import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("soon") is None
        True

        ```
    """
    if value is None:
        return None
    value = value.strip()

    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        if math.isfinite(seconds) and seconds >= 0:
            return seconds
        logger.debug(f"Ignoring out-of-range Retry-After header: {value!r}")
        return None

    try:
        retry_date = parsedate_to_datetime(value)
    except (ValueError, TypeError, IndexError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {value!r}")
        return None
    if retry_date.tzinfo is None:
        retry_date = retry_date.replace(tzinfo=timezone.utc)
    return max(0.0, (retry_date - datetime.now(timezone.utc)).total_seconds())


def retry_after_from_response(response: httpx.Response | None) -> float | None:
    r"""Return the ``Retry-After`` delay of ``response`` in seconds, if
    any."""
    if response is None:
        return None
    return parse_retry_after(response.headers.get("Retry-After"))
