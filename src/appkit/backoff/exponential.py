r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from appkit.backoff.base import BaseBackoffStrategy

DEFAULT_BASE_DELAY = 0.1
DEFAULT_MULTIPLIER = 2.0
DEFAULT_MAX_DELAY = 5.0


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: ``base_delay * (multiplier ** attempt)``, capped
    at ``max_delay``.

    This is the default strategy of the HTTP client. With the defaults the
    successive delays are 0.1s, 0.2s, 0.4s, 0.8s, ... and never exceed 5s.

    Args:
        base_delay: The delay in seconds before the first retry.
        multiplier: The growth factor between two consecutive retries.
            Must be >= 1 so that delays never decrease.
        max_delay: Optional maximum delay cap in seconds. ``None``
            disables the cap.

    Example:
        ```pycon
        >>> from appkit.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.3)
        >>> backoff.calculate(0)
        0.3
        >>> backoff.calculate(1)
        0.6
        >>> backoff = ExponentialBackoff(base_delay=1.0, max_delay=5.0)
        >>> backoff.calculate(10)  # Would be 1024.0, but capped
        5.0

        ```
    """

    def __init__(
        self,
        base_delay: float = DEFAULT_BASE_DELAY,
        multiplier: float = DEFAULT_MULTIPLIER,
        max_delay: float | None = DEFAULT_MAX_DELAY,
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"multiplier={self.multiplier}, max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The current attempt number (0-indexed).

        Returns:
            ``base_delay * (multiplier ** attempt)``, capped at
            ``max_delay`` if set.
        """
        delay = self.base_delay * (self.multiplier**attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
