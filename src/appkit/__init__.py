r"""appkit - application toolkit.

This package bundles the small pieces every service needs at start-up:

    - ``appkit.env``: validation of the process environment
      (pydantic-settings)
    - ``appkit.logger``: one-line console logging with structured metadata
    - ``appkit.http``: an asynchronous HTTP client built on httpx that
      retries network failures, 5xx and 429 responses with exponential
      backoff, and optionally validates response bodies with pydantic

Example:
    ```pycon
    >>> from pydantic import BaseModel
    >>> from appkit import HttpClient, RetryPolicy
    >>> from appkit.backoff import ConstantBackoff
    >>> class Item(BaseModel):
    ...     id: int
    ...
    >>> async def main():  # doctest: +SKIP
    ...     policy = RetryPolicy(max_retries=5, backoff=ConstantBackoff(0.5))
    ...     async with HttpClient(timeout=10, retry_policy=policy) as http:
    ...         item = await http.get("https://api.example.com/items/1", schema=Item)
    ...         data = await http.get("https://api.example.com/anything")
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "RAW",
    "AppkitError",
    "ClientError",
    "EnvSettings",
    "EnvValidationError",
    "HttpClient",
    "HttpRequestError",
    "HttpStatusError",
    "NetworkError",
    "RateLimitedError",
    "RequestConfig",
    "ResponseSchema",
    "ResponseValidationError",
    "RetryExhaustedError",
    "RetryPolicy",
    "ServerError",
    "Toolkit",
    "__version__",
    "create_logger",
    "create_toolkit",
    "load_env",
]

from importlib.metadata import PackageNotFoundError, version

from appkit.env import EnvSettings, load_env
from appkit.exceptions import (
    AppkitError,
    ClientError,
    EnvValidationError,
    HttpRequestError,
    HttpStatusError,
    NetworkError,
    RateLimitedError,
    ResponseValidationError,
    RetryExhaustedError,
    ServerError,
)
from appkit.http import HttpClient, RequestConfig
from appkit.logger import create_logger
from appkit.retry import RetryPolicy
from appkit.schema import RAW, ResponseSchema
from appkit.toolkit import Toolkit, create_toolkit

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
