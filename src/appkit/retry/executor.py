r"""Asynchronous retry loop around a single HTTP exchange.

The executor wraps a zero-argument coroutine function performing one
transport round trip. It never changes what is sent: every attempt calls
the same function, so the request is reissued unchanged.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor", "NETWORK_FAILURE"]

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from appkit.exceptions import (
    HttpRequestError,
    NetworkError,
    RetryExhaustedError,
    status_error_from_response,
)
from appkit.retry.policy import Outcome, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)

# Marker logged in place of a status code when no response was obtained
NETWORK_FAILURE = "network error"


class AsyncRetryExecutor:
    """Executes an async HTTP exchange with automatic retry logic.

    For each attempt the executor awaits the exchange, classifies the
    outcome, asks the ``RetryPolicy`` whether to retry and, if so, logs
    one warning and sleeps for the policy delay before the next attempt.

    The attempt counter lives in the ``execute`` frame, so one executor
    can serve any number of concurrent calls. Cancelling the calling task
    interrupts the in-flight exchange or the backoff wait and no further
    attempt is made.

    Args:
        policy: The retry policy. Defaults to ``RetryPolicy()``.
        retry_logger: Logger receiving the retry warnings. Defaults to
            the module logger.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from appkit.retry import AsyncRetryExecutor, RetryPolicy
        >>> async def main():
        ...     executor = AsyncRetryExecutor(RetryPolicy(max_retries=2))
        ...     async with httpx.AsyncClient() as client:
        ...         return await executor.execute(
        ...             "GET",
        ...             "https://api.example.com/data",
        ...             lambda: client.get("https://api.example.com/data"),
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        retry_logger: logging.Logger | None = None,
    ) -> None:
        self.policy = policy if policy is not None else RetryPolicy()
        self.logger = retry_logger if retry_logger is not None else logger

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy!r})"

    async def execute(
        self,
        method: str,
        url: str,
        send: Callable[[], Awaitable[httpx.Response]],
    ) -> httpx.Response:
        """Run ``send`` until it succeeds or the policy gives up.

        Args:
            method: The HTTP method, used in errors and log records.
            url: The requested URL, used in errors and log records.
            send: Coroutine function performing one round trip.

        Returns:
            The first response with a status code below 400.

        Raises:
            ClientError: On a 4xx response other than 429, immediately.
            RetryExhaustedError: If a transient failure (network error,
                429 or 5xx) is still there after ``max_retries`` retries.
                ``last_error`` holds the error of the last attempt.
        """
        max_retries = self.policy.max_retries
        attempt = 0
        while True:
            try:
                response = await send()
            except httpx.RequestError as exc:
                outcome = Outcome(error=exc)
                error: HttpRequestError = NetworkError(
                    method=method,
                    url=url,
                    message=f"{method} request to {url} failed: {type(exc).__name__}: {exc}",
                    cause=exc,
                )
                error.__cause__ = exc
            else:
                if response.status_code < 400:
                    if attempt > 0:
                        logger.debug(f"{method} {url} succeeded after {attempt} retries")
                    return response
                outcome = Outcome(response=response)
                error = status_error_from_response(method, url, response)

            if not self.policy.should_retry(outcome, attempt):
                if self.policy.is_transient(outcome):
                    raise RetryExhaustedError(error, attempts=attempt + 1) from error
                logger.debug(f"{method} {url}: not retrying status {outcome.status_code}")
                raise error

            delay = self.policy.next_delay(attempt, outcome)
            status = NETWORK_FAILURE if outcome.status_code is None else outcome.status_code
            self.logger.warning(
                f"🔄 Retrying {method} {url} (attempt {attempt + 1}/{max_retries}) - {status}",
                extra={
                    "method": method,
                    "url": url,
                    "attempt": attempt + 1,
                    "max_retries": max_retries,
                    "status": status,
                    "delay": delay,
                },
            )
            await asyncio.sleep(delay)
            attempt += 1
