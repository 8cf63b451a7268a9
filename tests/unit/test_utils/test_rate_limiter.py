import pytest
from unittest.mock import AsyncMock, patch

from discuss_digest.utils.rate_limiter import RateLimiter


@pytest.mark.asyncio
async def test_burst_is_free():
    limiter = RateLimiter(requests_per_minute=60, burst_size=3)

    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        waits = [await limiter.acquire() for _ in range(3)]

    assert waits == [0.0, 0.0, 0.0]
    mock_sleep.assert_not_called()


@pytest.mark.asyncio
async def test_waits_when_bucket_empty():
    limiter = RateLimiter(requests_per_minute=60, burst_size=1)

    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await limiter.acquire()
        wait = await limiter.acquire()

    assert wait > 0
    assert wait <= 1.0
    mock_sleep.assert_awaited_once()


def test_invalid_rate():
    with pytest.raises(ValueError):
        RateLimiter(requests_per_minute=0)
