"""Unit tests for Redis idempotency store adapter."""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from app.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore

FROM_URL = "app.adapters.outbound.idempotency.redis_idempotency_store.aioredis.from_url"


@pytest.fixture
def mock_redis_client():
    """Create a mock Redis client."""
    client = AsyncMock()
    client.exists = AsyncMock(return_value=0)
    client.setex = AsyncMock()
    client.close = AsyncMock()
    return client


@pytest.fixture
def redis_store():
    """Create Redis idempotency store with test URL."""
    return RedisIdempotencyStore("redis://localhost:6379/0")


@pytest.mark.asyncio
async def test_is_processed_returns_false_when_not_dispatched(redis_store, mock_redis_client):
    """Test is_processed returns False when key doesn't exist."""
    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        result = await redis_store.is_processed("17")

        assert result is False
        mock_redis_client.exists.assert_called_once_with("crm:dispatched:17")


@pytest.mark.asyncio
async def test_is_processed_returns_true_when_dispatched(redis_store, mock_redis_client):
    """Test is_processed returns True when key exists."""
    mock_redis_client.exists.return_value = 1

    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        result = await redis_store.is_processed("17")

        assert result is True


@pytest.mark.asyncio
async def test_mark_processed_stores_key_with_ttl(redis_store, mock_redis_client):
    """Test mark_processed stores key with TTL."""
    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        await redis_store.mark_processed("17", ttl_seconds=3600)

        mock_redis_client.setex.assert_called_once_with("crm:dispatched:17", 3600, "1")


@pytest.mark.asyncio
async def test_is_processed_degrades_when_redis_is_down(redis_store, mock_redis_client):
    """Test a Redis outage reads as not dispatched instead of raising."""
    mock_redis_client.exists.side_effect = RedisConnectionError("connection refused")

    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        assert await redis_store.is_processed("17") is False


@pytest.mark.asyncio
async def test_mark_processed_swallows_redis_outage(redis_store, mock_redis_client):
    """Test a Redis outage while recording a dispatch does not raise."""
    mock_redis_client.setex.side_effect = RedisConnectionError("connection refused")

    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        await redis_store.mark_processed("17", ttl_seconds=60)

        mock_redis_client.setex.assert_called_once()


@pytest.mark.asyncio
async def test_close_closes_redis_connection(redis_store, mock_redis_client):
    """Test close closes Redis connection."""
    redis_store._client = mock_redis_client

    await redis_store.close()

    mock_redis_client.close.assert_called_once()
    assert redis_store._client is None


@pytest.mark.asyncio
async def test_client_reuse(redis_store, mock_redis_client):
    """Test that client is reused across multiple calls."""
    with patch(FROM_URL, new_callable=AsyncMock) as mock_from_url:
        mock_from_url.return_value = mock_redis_client

        await redis_store.is_processed("1")
        assert mock_from_url.call_count == 1

        await redis_store.mark_processed("1", 60)
        assert mock_from_url.call_count == 1
