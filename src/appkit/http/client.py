r"""Resilient HTTP client facade.

This module provides ``HttpClient``, the entry point of the toolkit for
talking to HTTP services. It composes three collaborators without
altering any of them: an ``httpx.AsyncClient`` performing the round
trips, an ``AsyncRetryExecutor`` owning the retry policy, and a logger
receiving one warning per retry.
"""

from __future__ import annotations

__all__ = ["HttpClient", "decode_body"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from appkit.http.config import DEFAULT_TIMEOUT, RequestConfig
from appkit.retry import AsyncRetryExecutor, RetryPolicy
from appkit.schema import RAW, ResponseSchema, as_schema
from appkit.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body.

    Args:
        response: A response whose content has been read.

    Returns:
        The parsed JSON document when the body is valid JSON, the text
        body otherwise, and ``None`` for an empty body.

    Example:
        ```pycon
        >>> import httpx
        >>> from appkit.http.client import decode_body
        >>> decode_body(httpx.Response(200, json={"id": 1}))
        {'id': 1}
        >>> decode_body(httpx.Response(200, text="pong"))
        'pong'
        >>> decode_body(httpx.Response(204)) is None
        True

        ```
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpClient:
    r"""Asynchronous HTTP client with automatic retry and response
    validation.

    Network failures, 5xx and 429 responses are retried according to the
    retry policy; any other 4xx response fails immediately. Successful
    bodies are decoded and checked against the schema of the call, if any.

    The client is meant to be built once at process start and shared: it
    keeps no per-call state, so concurrent calls need no coordination.

    Args:
        base_url: Base URL prepended to relative request URLs. Ignored if
            ``client`` is given.
        timeout: Default timeout in seconds of each individual attempt.
            Must be > 0.
        headers: Default headers sent with every request. Ignored if
            ``client`` is given.
        retry_policy: Retry policy shared by every call. Defaults to
            ``RetryPolicy()`` (3 retries, exponential backoff).
        max_retries: Optional override of the ``max_retries`` of
            ``retry_policy``, so that one policy can be shared by clients
            with different retry budgets.
        logger: Logger receiving the retry warnings. Defaults to the
            ``appkit.http.client`` logger.
        client: Optional pre-built ``httpx.AsyncClient``. Its lifecycle
            stays with the caller: ``aclose`` does not close it.

    Example:
        ```pycon
        >>> import asyncio
        >>> from pydantic import BaseModel
        >>> from appkit.http import HttpClient
        >>> class Item(BaseModel):
        ...     id: int
        ...
        >>> async def main():  # doctest: +SKIP
        ...     async with HttpClient(base_url="https://api.example.com") as http:
        ...         item = await http.get("/items/1", schema=Item)
        ...         raw = await http.post("/items", {"name": "x"})
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        base_url: str | httpx.URL = "",
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        headers: Mapping[str, str] | None = None,
        retry_policy: RetryPolicy | None = None,
        max_retries: int | None = None,
        logger: logging.Logger | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        validate_timeout(timeout)
        policy = (retry_policy if retry_policy is not None else RetryPolicy()).merge(
            max_retries=max_retries
        )
        self._timeout = timeout
        self._owns_client = client is None
        self._client = (
            client
            if client is not None
            else httpx.AsyncClient(
                base_url=base_url, timeout=timeout, headers=headers, follow_redirects=True
            )
        )
        self._executor = AsyncRetryExecutor(policy=policy, retry_logger=logger)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_url={str(self._client.base_url)!r}, "
            f"timeout={self._timeout!r}, retry_policy={self.retry_policy!r})"
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def retry_policy(self) -> RetryPolicy:
        r"""The retry policy applied to every call."""
        return self._executor.policy

    @property
    def timeout(self) -> float | httpx.Timeout:
        r"""The default per-attempt timeout."""
        return self._timeout

    async def aclose(self) -> None:
        r"""Close the underlying ``httpx.AsyncClient`` if this client created
        it."""
        if self._owns_client:
            await self._client.aclose()

    async def request(self, config: RequestConfig[T]) -> T:
        """Send a request with automatic retry logic.

        Args:
            config: The description of the call.

        Returns:
            The decoded body, validated by ``config.schema``. With the
            default ``RAW`` schema the body is returned as decoded.

        Raises:
            ClientError: If the server answers with a 4xx other than 429.
            RetryExhaustedError: If a network failure, 5xx or 429 persists
                after every retry.
            ResponseValidationError: If the body does not satisfy the
                schema. Such a failure is never retried.
        """
        method = config.method
        kwargs = config.transport_kwargs()
        kwargs.setdefault("timeout", self._timeout)

        async def send() -> httpx.Response:
            return await self._client.request(method, config.url, **kwargs)

        response = await self._executor.execute(method, config.url, send)
        body = decode_body(response)
        logger.debug(f"{method} {config.url} -> {response.status_code}")
        return config.schema.validate(body)

    async def get(
        self,
        url: str,
        *,
        schema: ResponseSchema[T] | type[T] = RAW,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> T:
        r"""Send a GET request. See ``request`` for the semantics."""
        return await self.request(
            RequestConfig(
                "GET", url, headers=headers, params=params, timeout=timeout, schema=as_schema(schema)
            )
        )

    async def post(
        self,
        url: str,
        data: Any = None,
        *,
        schema: ResponseSchema[T] | type[T] = RAW,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> T:
        """Send a POST request with an optional JSON body.

        Args:
            url: Target URL.
            data: Optional body, sent as JSON.
            schema: Schema or type the response body must satisfy.
            headers: Optional extra headers.
            params: Optional query string parameters.
            timeout: Optional per-attempt timeout override.

        Returns:
            The decoded, optionally validated, response body.
        """
        return await self.request(
            RequestConfig(
                "POST",
                url,
                data=data,
                headers=headers,
                params=params,
                timeout=timeout,
                schema=as_schema(schema),
            )
        )

    async def put(
        self,
        url: str,
        data: Any = None,
        *,
        schema: ResponseSchema[T] | type[T] = RAW,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> T:
        r"""Send a PUT request with an optional JSON body."""
        return await self.request(
            RequestConfig(
                "PUT",
                url,
                data=data,
                headers=headers,
                params=params,
                timeout=timeout,
                schema=as_schema(schema),
            )
        )

    async def patch(
        self,
        url: str,
        data: Any = None,
        *,
        schema: ResponseSchema[T] | type[T] = RAW,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> T:
        r"""Send a PATCH request with an optional JSON body."""
        return await self.request(
            RequestConfig(
                "PATCH",
                url,
                data=data,
                headers=headers,
                params=params,
                timeout=timeout,
                schema=as_schema(schema),
            )
        )

    async def delete(
        self,
        url: str,
        *,
        schema: ResponseSchema[T] | type[T] = RAW,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        timeout: float | httpx.Timeout | None = None,
    ) -> T:
        r"""Send a DELETE request."""
        return await self.request(
            RequestConfig(
                "DELETE",
                url,
                headers=headers,
                params=params,
                timeout=timeout,
                schema=as_schema(schema),
            )
        )
