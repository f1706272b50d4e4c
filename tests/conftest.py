from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def retry_logger() -> logging.Logger:
    """Create a dedicated logger to count retry warnings with caplog."""
    logger = logging.getLogger("tests.retry")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def mock_transport() -> Callable[..., tuple[httpx.AsyncClient, list[httpx.Request]]]:
    """Create an httpx.AsyncClient replaying a sequence of outcomes.

    Each outcome is either an ``httpx.Response``, copied before being
    returned, or an exception raised by the transport. A request beyond
    the end of the sequence fails the test.

    Returns:
        A factory returning the client and the list of requests it
        received.
    """

    def factory(*outcomes: httpx.Response | Exception) -> tuple[httpx.AsyncClient, list[httpx.Request]]:
        remaining = list(outcomes)
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if not remaining:
                msg = f"unexpected request #{len(requests)}: {request.method} {request.url}"
                raise AssertionError(msg)
            outcome = remaining.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return httpx.Response(
                outcome.status_code, headers=outcome.headers, content=outcome.content
            )

        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), requests

    return factory
