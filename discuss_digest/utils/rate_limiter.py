import asyncio
import time
import structlog

logger = structlog.get_logger()


class RateLimiter:
    """Token bucket limiter pacing requests to the feed"""

    def __init__(self, requests_per_minute: int = 60, burst_size: int = 5):
        if requests_per_minute < 1:
            raise ValueError("requests_per_minute must be at least 1")
        self.rate = requests_per_minute / 60.0
        self.burst_size = burst_size
        self.tokens = float(burst_size)
        self.last_update = time.monotonic()

    async def acquire(self) -> float:
        """Acquire a token, waiting if necessary.

        Returns:
            Seconds spent waiting (0.0 when a token was available)
        """
        # 1. Refill
        now = time.monotonic()
        elapsed = now - self.last_update
        self.tokens = min(self.burst_size, self.tokens + elapsed * self.rate)
        self.last_update = now

        # 2. Spend or wait
        if self.tokens < 1:
            wait_time = (1 - self.tokens) / self.rate
            logger.debug("rate_limiter_waiting", wait_seconds=round(wait_time, 3))
            await asyncio.sleep(wait_time)
            self.tokens = 0
            self.last_update = time.monotonic()
            return wait_time

        self.tokens -= 1
        return 0.0
