r"""Process-wide wiring of the toolkit components.

``create_toolkit`` validates the environment, builds the console logger
and the HTTP client once, and hands them out together. Consumers receive
the ``Toolkit`` explicitly instead of importing module-level singletons.
On exit the HTTP client is closed and the log handlers are flushed.

Example:
    ```pycon
    >>> import asyncio
    >>> from appkit.toolkit import create_toolkit
    >>> async def main():  # doctest: +SKIP
    ...     async with create_toolkit(base_url="https://api.example.com") as toolkit:
    ...         toolkit.logger.info("starting", extra={"env": toolkit.env.ENVIRONMENT})
    ...         return await toolkit.http.get("/health")
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["Toolkit", "create_toolkit"]

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from appkit.env import EnvSettings, load_env
from appkit.http import DEFAULT_TIMEOUT, HttpClient
from appkit.logger import create_logger, shutdown_logger

if TYPE_CHECKING:
    import logging
    from collections.abc import AsyncIterator

    import httpx

    from appkit.retry import RetryPolicy


@dataclass(frozen=True)
class Toolkit:
    r"""The shared components of an application."""

    env: EnvSettings
    logger: logging.Logger
    http: HttpClient

    async def aclose(self) -> None:
        r"""Close the HTTP client, then flush and detach the log
        handlers."""
        try:
            await self.http.aclose()
        finally:
            shutdown_logger(self.logger)


@asynccontextmanager
async def create_toolkit(
    *,
    env: EnvSettings | None = None,
    env_file: str | None = ".env",
    logger_name: str = "appkit",
    base_url: str = "",
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
    retry_policy: RetryPolicy | None = None,
    max_retries: int | None = None,
    client: httpx.AsyncClient | None = None,
) -> AsyncIterator[Toolkit]:
    """Build the toolkit components and tear them down on exit.

    Args:
        env: Already validated settings. If ``None``, the environment is
            validated with ``load_env(env_file)``.
        env_file: The dotenv file read when ``env`` is ``None``.
        logger_name: Name of the application logger.
        base_url: Base URL of the HTTP client.
        timeout: Default per-attempt timeout of the HTTP client.
        retry_policy: Retry policy of the HTTP client.
        max_retries: Optional override of the retry budget of
            ``retry_policy``.
        client: Optional pre-built ``httpx.AsyncClient`` used as transport.

    Yields:
        The toolkit.

    Raises:
        EnvValidationError: If the environment is invalid.
        ValueError: If a client parameter is invalid.
    """
    settings = env if env is not None else load_env(env_file)
    logger = create_logger(settings.ENVIRONMENT, name=logger_name)
    try:
        http = HttpClient(
            base_url=base_url,
            timeout=timeout,
            retry_policy=retry_policy,
            max_retries=max_retries,
            logger=logger,
            client=client,
        )
    except Exception:
        shutdown_logger(logger)
        raise
    toolkit = Toolkit(env=settings, logger=logger, http=http)
    try:
        yield toolkit
    finally:
        await toolkit.aclose()
