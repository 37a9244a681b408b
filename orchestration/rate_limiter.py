"""
Rate Gate for LLM Calls
Keeps a minimum spacing between outbound Gemini requests.

One gate is shared by every request in the process. Waiting happens while
the lock is held, so concurrent callers queue behind the single slot instead
of all reading the same last-call time and proceeding together.
"""
import asyncio
import time
from dataclasses import dataclass, field

# utils/__init__ pulls in chat_store, which imports orchestration.types
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RateGate:
    """
    Minimum-interval gate for API calls.

    Spaces calls out so a burst of retries or concurrent chats does not hit
    Gemini back to back. Per-minute quotas are left to the provider.
    """
    min_interval: float = 1.0  # seconds

    # Monotonic time of the last permitted call (0 = never)
    last_call_time: float = 0.0
    total_acquired: int = 0

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def acquire(self) -> float:
        """
        Wait until the minimum interval since the last call has passed,
        then claim the slot.
        Returns the number of seconds waited.
        """
        async with self.lock:
            wait_time = 0.0

            if self.last_call_time:
                elapsed = time.monotonic() - self.last_call_time
                wait_time = max(0.0, self.min_interval - elapsed)

            if wait_time > 0:
                logger.info(f"Rate limiting: waiting {wait_time * 1000:.0f}ms before next request")
                await asyncio.sleep(wait_time)

            # Record this request
            self.last_call_time = time.monotonic()
            self.total_acquired += 1

            return wait_time

    def get_usage_stats(self) -> dict:
        """Get current gate statistics"""
        since_last = None
        if self.last_call_time:
            since_last = time.monotonic() - self.last_call_time

        return {
            "min_interval": self.min_interval,
            "total_acquired": self.total_acquired,
            "seconds_since_last_call": since_last,
        }
