r"""Defaults and per-call request configuration of the HTTP client."""

from __future__ import annotations

__all__ = ["DEFAULT_TIMEOUT", "RequestConfig"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from appkit.schema import RAW, ResponseSchema
from appkit.validation import validate_method, validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

T = TypeVar("T")

# Default timeout in seconds of every individual attempt
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class RequestConfig(Generic[T]):
    """Description of one logical HTTP call.

    The configuration is immutable: every attempt of the call, retries
    included, sends exactly the same request.

    Args:
        method: HTTP method, one of GET, POST, PUT, PATCH or DELETE
            (case-insensitive, stored upper-cased).
        url: Target URL, absolute or relative to the client base URL.
        data: Optional body, sent as JSON.
        headers: Optional headers added to the client default headers.
        params: Optional query string parameters.
        timeout: Optional per-attempt timeout overriding the client one.
        schema: Schema the decoded response body must satisfy.
            ``RAW`` (the default) returns the body unvalidated.

    Example:
        ```pycon
        >>> from appkit.http import RequestConfig
        >>> from appkit.schema import ResponseSchema
        >>> config = RequestConfig("get", "/items/1", schema=ResponseSchema(dict))
        >>> config.method
        'GET'

        ```
    """

    method: str
    url: str
    data: Any = None
    headers: Mapping[str, str] | None = None
    params: Mapping[str, Any] | None = None
    timeout: float | httpx.Timeout | None = None
    schema: ResponseSchema[T] = field(default=RAW)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", validate_method(self.method))
        if self.timeout is not None:
            validate_timeout(self.timeout)

    def transport_kwargs(self) -> dict[str, Any]:
        r"""Return the keyword arguments of ``httpx.AsyncClient.request``
        for this call, leaving out unset options."""
        kwargs: dict[str, Any] = {}
        if self.data is not None:
            kwargs["json"] = self.data
        if self.headers is not None:
            kwargs["headers"] = dict(self.headers)
        if self.params is not None:
            kwargs["params"] = dict(self.params)
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return kwargs
