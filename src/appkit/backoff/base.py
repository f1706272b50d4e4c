r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BackoffFunction", "BaseBackoffStrategy"]

from abc import ABC, abstractmethod
from collections.abc import Callable

# Any callable mapping a 0-indexed retry attempt to a delay in seconds
BackoffFunction = Callable[[int], float]


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed request based on the attempt number. Instances are callable,
    so a strategy can be used anywhere a plain backoff function is
    accepted.

    Two strategies of the same type and parameters compare equal, so
    policies built from equal strategies compare equal too.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            attempt: The current attempt number (0-indexed). For example,
                attempt=0 is the first retry, attempt=1 is the second retry, etc.

        Returns:
            The calculated delay in seconds before the next retry attempt.
        """

    def __call__(self, attempt: int) -> float:
        return self.calculate(attempt)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))
