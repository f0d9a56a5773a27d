"""
Exponential backoff for transient transport failures.

Only failures where the network may simply have dropped the request are
retried. An explicit rejection from the server (4xx other than 408/429)
is handed back on the first attempt.
"""

import random
from dataclasses import dataclass
from typing import Tuple

# Statuses a transient-retry middleware treats as "try again"
TRANSIENT_STATUS_CODES: Tuple[int, ...] = (408, 429, 500, 502, 503, 504)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Backoff bounds and retry budget.

    Delay before retry n (0-based) grows as min_delay * 2**n, capped at
    max_delay, with jitter drawn from [min_delay, delay].
    """

    min_delay: float = 5.0
    max_delay: float = 10.0
    max_retries: int = 3
    retry_on: Tuple[int, ...] = TRANSIENT_STATUS_CODES
    jitter: bool = True

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries_invalid")
        if self.min_delay < 0 or self.max_delay < self.min_delay:
            raise ValueError("retry_bounds_invalid")
        object.__setattr__(self, "retry_on", tuple(int(code) for code in self.retry_on))

    @classmethod
    def from_wait_time(cls, retry_wait_time_sec: float, retry_count: int) -> "RetryPolicy":
        """Bounds are [wait / 2, wait]."""
        return cls(
            min_delay=retry_wait_time_sec / 2,
            max_delay=float(retry_wait_time_sec),
            max_retries=retry_count,
        )

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def backoff_for(self, retry_index: int) -> float:
        """Seconds to wait before retry number `retry_index` (0-based)."""
        if self.max_delay == 0:
            return 0.0
        if retry_index >= 64:
            delay = self.max_delay
        else:
            delay = min(self.min_delay * (2 ** retry_index), self.max_delay)
        if not self.jitter or delay <= self.min_delay:
            return delay
        return random.uniform(self.min_delay, delay)

    def is_retryable_status(self, status_code: int) -> bool:
        return status_code in self.retry_on

    def should_retry(self, retry_index: int) -> bool:
        """True while retry number `retry_index` is still within budget."""
        return retry_index < self.max_retries
