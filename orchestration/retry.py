"""
Retry Policy
Wraps a fallible async operation with bounded retries and exponential
backoff with jitter. Every attempt goes through the shared RateGate first.
"""
import asyncio
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from utils.logger import get_logger
from .rate_limiter import RateGate

logger = get_logger(__name__)

T = TypeVar("T")


# Error text fragments that mark a transient failure (matched case-insensitively)
RETRYABLE_MARKERS = (
    "fetch failed",
    "network",
    "timeout",
    "rate limit",
    "quota",
    "503",
    "502",
    "500",
)


def is_retryable_error(error: BaseException, markers: tuple[str, ...] = RETRYABLE_MARKERS) -> bool:
    """Decide from the error's text whether another attempt could succeed"""
    message = str(error).lower()
    return any(marker in message for marker in markers)


def _check_max_retries(max_retries: int) -> None:
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")


@dataclass
class RetryState:
    """Bookkeeping for one execute() call"""
    attempt: int = 0
    last_error: Optional[BaseException] = None
    delay: float = 0.0


class RetryPolicy:
    """
    Retry-with-backoff around provider calls.

    Attempts run 0..max_retries inclusive. Non-retryable errors propagate on
    first occurrence; when the last attempt fails its own error is re-raised.
    """

    def __init__(
        self,
        rate_gate: RateGate,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_jitter: float = 1.0,
        markers: tuple[str, ...] = RETRYABLE_MARKERS,
    ):
        _check_max_retries(max_retries)
        self.rate_gate = rate_gate
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_jitter = max_jitter
        self.markers = markers

    def backoff_delay(self, attempt: int, base_delay: float) -> float:
        """base_delay * 2^attempt plus up to max_jitter seconds of jitter"""
        jitter = random.uniform(0, self.max_jitter) if self.max_jitter > 0 else 0.0
        return base_delay * (2 ** attempt) + jitter

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
    ) -> T:
        """Run operation until it succeeds, fails permanently, or attempts run out"""
        if max_retries is None:
            max_retries = self.max_retries
        if base_delay is None:
            base_delay = self.base_delay
        _check_max_retries(max_retries)

        state = RetryState()

        for attempt in range(max_retries + 1):
            state.attempt = attempt
            try:
                await self.rate_gate.acquire()
                return await operation()
            except Exception as e:
                state.last_error = e
                logger.warning(f"Attempt {attempt + 1} failed: {e}")

                if attempt == max_retries:
                    break

                if not is_retryable_error(e, self.markers):
                    raise

                state.delay = self.backoff_delay(attempt, base_delay)
                logger.info(
                    f"Retrying in {state.delay * 1000:.0f}ms... "
                    f"(attempt {attempt + 1}/{max_retries + 1})"
                )
                await asyncio.sleep(state.delay)

        raise state.last_error
