r"""Retry decision logic.

This module contains the pure decision logic of the HTTP client: whether
the outcome of an attempt deserves another attempt, and how long to wait
before making it. It performs no I/O and keeps no state between calls,
so a single ``RetryPolicy`` is safely shared by concurrent requests.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MAX_WAIT_TIME",
    "Outcome",
    "RetryPolicy",
    "is_transient_status",
]

import logging
import random
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from appkit.backoff import BackoffFunction, ExponentialBackoff
from appkit.retry.retry_after import retry_after_from_response
from appkit.validation import validate_retry_params

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)

# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3
# Upper bound of any single wait, Retry-After included
DEFAULT_MAX_WAIT_TIME = 30.0


def is_transient_status(status_code: int) -> bool:
    """Return ``True`` if an error status code is worth retrying.

    429 (rate limiting) and every 5xx code are transient. Any other code,
    including the rest of the 4xx range, is not.

    Example:
        ```pycon
        >>> from appkit.retry.policy import is_transient_status
        >>> is_transient_status(503), is_transient_status(429), is_transient_status(404)
        (True, True, False)

        ```
    """
    return status_code == 429 or 500 <= status_code <= 599


@dataclass(frozen=True)
class Outcome:
    """The result of a single transport attempt.

    Exactly one of ``response`` and ``error`` is usually set: a response
    when the server answered (whatever the status code), an error when
    the transport failed before obtaining one.

    Args:
        response: The response returned by the server, if any.
        error: The transport-level exception, if any.
    """

    response: httpx.Response | None = None
    error: BaseException | None = None

    @property
    def is_network_failure(self) -> bool:
        r"""``True`` if no response was obtained."""
        return self.response is None

    @property
    def status_code(self) -> int | None:
        r"""The response status code, or ``None`` on network failure."""
        return None if self.response is None else self.response.status_code


@dataclass(frozen=True)
class RetryPolicy:
    """Decide whether and when a failed attempt is retried.

    Args:
        max_retries: Maximum number of retries after the initial attempt.
            Must be >= 0.
        backoff: Backoff strategy or plain callable mapping the 0-indexed
            retry attempt to a delay in seconds. Defaults to
            ``ExponentialBackoff()`` (0.1s doubling, capped at 5s).
        jitter_factor: Random jitter added on top of the delay, as a
            fraction of it. Must be >= 0. ``0`` disables jitter.
        respect_retry_after: If ``True``, a ``Retry-After`` header on the
            failed response replaces the backoff delay.
        max_wait_time: Cap in seconds applied to every delay,
            ``Retry-After`` included. Must be > 0. ``None`` removes the
            cap and lets the server impose any wait.

    Example:
        ```pycon
        >>> import httpx
        >>> from appkit.retry import Outcome, RetryPolicy
        >>> policy = RetryPolicy(max_retries=2)
        >>> policy.should_retry(Outcome(response=httpx.Response(503)), attempt=0)
        True
        >>> policy.should_retry(Outcome(response=httpx.Response(503)), attempt=2)
        False
        >>> policy.should_retry(Outcome(response=httpx.Response(404)), attempt=0)
        False
        >>> policy.next_delay(0), policy.next_delay(1)
        (0.1, 0.2)

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff: BackoffFunction = field(default_factory=ExponentialBackoff)
    jitter_factor: float = 0.0
    respect_retry_after: bool = True
    max_wait_time: float | None = DEFAULT_MAX_WAIT_TIME

    def __post_init__(self) -> None:
        validate_retry_params(
            max_retries=self.max_retries,
            jitter_factor=self.jitter_factor,
            max_wait_time=self.max_wait_time,
        )

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with the non-``None`` overrides applied.

        Example:
            ```pycon
            >>> from appkit.retry import RetryPolicy
            >>> RetryPolicy().merge(max_retries=5, jitter_factor=None).max_retries
            5

            ```
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def should_retry(self, outcome: Outcome, attempt: int) -> bool:
        """Decide whether the outcome of ``attempt`` deserves a retry.

        Args:
            outcome: The outcome of the attempt that just completed.
            attempt: The 0-indexed number of that attempt (0 is the
                initial request).

        Returns:
            ``True`` if another attempt should be made: the budget is not
            spent and the outcome is a network failure, a 5xx or a 429.
        """
        if attempt >= self.max_retries:
            return False
        return self.is_transient(outcome)

    def is_transient(self, outcome: Outcome) -> bool:
        r"""``True`` if the outcome is a network failure, a 5xx or a 429,
        regardless of the remaining budget."""
        if outcome.response is None:
            return True
        return is_transient_status(outcome.response.status_code)

    def next_delay(self, attempt: int, outcome: Outcome | None = None) -> float:
        """Compute the wait before the retry following ``attempt``.

        Args:
            attempt: The 0-indexed number of the attempt that just failed.
            outcome: The outcome of that attempt, used to honour a
                ``Retry-After`` header.

        Returns:
            The delay in seconds, jitter included.
        """
        delay: float | None = None
        if self.respect_retry_after and outcome is not None:
            delay = retry_after_from_response(outcome.response)
            if delay is not None:
                logger.debug(f"Using Retry-After header value: {delay:.2f}s")
        if delay is None:
            delay = self.backoff(attempt)

        if self.max_wait_time is not None and delay > self.max_wait_time:
            logger.debug(f"Capping delay from {delay:.2f}s to {self.max_wait_time:.2f}s")
            delay = self.max_wait_time

        if self.jitter_factor > 0:
            delay += random.uniform(0, self.jitter_factor) * delay  # noqa: S311
        return delay
