r"""Backoff strategies for retry delays.

This package provides the strategies used to compute how long to wait
between two attempts of the same logical request.
"""

from __future__ import annotations

__all__ = [
    "BackoffFunction",
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
]

from appkit.backoff.base import BackoffFunction, BaseBackoffStrategy
from appkit.backoff.constant import ConstantBackoff
from appkit.backoff.exponential import ExponentialBackoff
