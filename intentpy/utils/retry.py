"""Backoff policy applied between resolution attempts."""

from __future__ import annotations


class RetryPolicy:
    """Configuration for retry behavior.

    Attributes:
        max_retries: Maximum number of retry attempts after the first one
        base_delay: Base delay in seconds for exponential backoff
        max_delay: Maximum delay between retries in seconds
        exponential_base: Base for exponential backoff calculation
    """

    def __init__(
        self,
        max_retries: int = 1,
        base_delay: float = 0.0,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for a given retry number.

        Uses exponential backoff: delay = base_delay * (exponential_base ** attempt)
        Capped at max_delay.

        Args:
            attempt: The retry attempt number (0-indexed)

        Returns:
            Delay in seconds before next retry
        """
        if self.base_delay <= 0:
            return 0.0
        delay = self.base_delay * (self.exponential_base**attempt)
        return min(delay, self.max_delay)
