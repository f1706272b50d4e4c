r"""Fixed-interval backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from appkit.backoff.base import BaseBackoffStrategy


class ConstantBackoff(BaseBackoffStrategy):
    """Wait the same number of seconds before every retry.

    Useful when a service documents a fixed cool-down period, or to get
    predictable waits in tests. ``RetryPolicy.max_wait_time`` still caps
    the delay.

    Args:
        delay: The wait in seconds. Must be >= 0.

    Example:
        ```pycon
        >>> from appkit.backoff import ConstantBackoff
        >>> from appkit.retry import RetryPolicy
        >>> policy = RetryPolicy(backoff=ConstantBackoff(delay=2.5))
        >>> [policy.next_delay(attempt) for attempt in range(3)]
        [2.5, 2.5, 2.5]

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
