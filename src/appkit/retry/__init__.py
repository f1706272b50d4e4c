r"""Retry policy and retry loop of the HTTP client."""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor", "Outcome", "RetryPolicy", "parse_retry_after"]

from appkit.retry.executor import AsyncRetryExecutor
from appkit.retry.policy import Outcome, RetryPolicy
from appkit.retry.retry_after import parse_retry_after
