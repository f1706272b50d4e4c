r"""Resilient HTTP client with optional response-schema validation."""

from __future__ import annotations

__all__ = ["DEFAULT_TIMEOUT", "HttpClient", "RequestConfig"]

from appkit.http.client import HttpClient
from appkit.http.config import DEFAULT_TIMEOUT, RequestConfig
