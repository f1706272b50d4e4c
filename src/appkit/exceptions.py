r"""Exception classes raised by appkit.

The HTTP errors form a small taxonomy mirroring how the client reacts to
each failure: network failures, rate limiting and server errors are
transient and retried, client errors are surfaced immediately, and a
transient failure that used up its retry budget is reported as
``RetryExhaustedError`` carrying the last underlying error. Response
validation failures are unrelated to the transport and have their own
branch.
"""

from __future__ import annotations

__all__ = [
    "AppkitError",
    "ClientError",
    "EnvValidationError",
    "HttpRequestError",
    "HttpStatusError",
    "NetworkError",
    "RateLimitedError",
    "ResponseValidationError",
    "RetryExhaustedError",
    "ServerError",
    "status_error_from_response",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class AppkitError(Exception):
    r"""Base class of every error raised by appkit."""


class EnvValidationError(AppkitError):
    r"""Raised when the process environment does not satisfy the settings
    schema."""


class HttpRequestError(AppkitError):
    """Exception raised when an HTTP request fails.

    Args:
        method: The HTTP method used for the request.
        url: The URL that was requested.
        message: Descriptive error message.
        status_code: HTTP status code of the response, if any.
        response: The ``httpx.Response`` object, if any.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from appkit.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ...     message="GET request to https://api.example.com/data failed",
        ... )
        >>> error.method
        'GET'

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            self.__class__,
            (self.method, self.url, str(self), self.status_code, self.response, self.cause),
        )


class NetworkError(HttpRequestError):
    r"""The transport never obtained a response (connection refused, DNS
    failure, timeout...).

    The original ``httpx`` exception is available as ``cause`` and is
    chained as ``__cause__``.
    """


class HttpStatusError(HttpRequestError):
    r"""The server answered with an error status code (>= 400)."""

    @property
    def body(self) -> str | None:
        r"""The text body of the error response, if a response is
        attached."""
        if self.response is None:
            return None
        return self.response.text


class ClientError(HttpStatusError):
    r"""The server answered with a 4xx status code other than 429, or
    with a code outside the standard classes (600 and above).

    Such a failure is not transient, so it is never retried.
    """


class RateLimitedError(HttpStatusError):
    r"""The server answered with ``429 Too Many Requests``."""


class ServerError(HttpStatusError):
    r"""The server answered with a 5xx status code."""


class RetryExhaustedError(HttpRequestError):
    """A transient failure persisted after every allowed attempt.

    The error of the last attempt is kept as ``last_error`` (and chained as
    ``__cause__``); its status code, response and cause are copied onto this
    exception so callers can inspect them directly.

    Args:
        last_error: The error of the last attempt.
        attempts: The total number of attempts made, initial one included.
    """

    def __init__(self, last_error: HttpRequestError, attempts: int) -> None:
        super().__init__(
            method=last_error.method,
            url=last_error.url,
            message=f"{last_error} (gave up after {attempts} attempts)",
            status_code=last_error.status_code,
            response=last_error.response,
            cause=last_error.cause,
        )
        self.last_error = last_error
        self.attempts = attempts

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self.last_error, self.attempts))


class ResponseValidationError(AppkitError):
    """The response body does not satisfy the requested schema.

    The transport succeeded, so this error is never retried.

    Args:
        message: Descriptive error message.
        errors: The list of errors reported by pydantic.
        body: The decoded body that failed validation.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.body = body


def status_error_from_response(method: str, url: str, response: httpx.Response) -> HttpStatusError:
    r"""Build the error matching the status code of an error response.

    Args:
        method: The HTTP method used for the request.
        url: The URL that was requested.
        response: The error response (status code >= 400).

    Returns:
        A ``RateLimitedError`` for 429, a ``ServerError`` for 5xx and a
        ``ClientError`` otherwise.

    Example:
        ```pycon
        >>> import httpx
        >>> from appkit.exceptions import status_error_from_response
        >>> error = status_error_from_response("GET", "https://x.org", httpx.Response(503))
        >>> type(error).__name__, error.status_code
        ('ServerError', 503)

        ```
    """
    status_code = response.status_code
    if status_code == 429:
        error_cls: type[HttpStatusError] = RateLimitedError
    elif 500 <= status_code <= 599:
        error_cls = ServerError
    else:
        error_cls = ClientError
    return error_cls(
        method=method,
        url=url,
        message=f"{method} request to {url} failed with status {status_code}",
        status_code=status_code,
        response=response,
    )
