"""Redis idempotency store adapter."""

from typing import Optional

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from app.application.ports.idempotency_store import IdempotencyStore
from app.infrastructure.logging.logger import logger


class RedisIdempotencyStore(IdempotencyStore):
    """Redis adapter recording which leads were already delivered to the CRM."""

    KEY_PREFIX = "crm:dispatched:"

    def __init__(self, redis_url: str) -> None:
        """
        Initialize Redis idempotency store.

        Args:
            redis_url: Redis connection URL
        """
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, lead_id: str) -> str:
        return f"{self.KEY_PREFIX}{lead_id}"

    async def is_processed(self, key: str) -> bool:
        """
        Check if a lead has been dispatched.

        Args:
            key: Lead id

        Returns:
            True if the lead was already delivered, False otherwise
        """
        try:
            client = await self._get_client()
            exists = await client.exists(self._make_key(key))
        except RedisError as e:
            logger.warning(f"Redis unavailable, treating lead {key} as not dispatched: {e}")
            return False
        return exists > 0

    async def mark_processed(self, key: str, ttl_seconds: int) -> None:
        """
        Record a lead as dispatched with a TTL.

        Args:
            key: Lead id
            ttl_seconds: Time-to-live in seconds
        """
        try:
            client = await self._get_client()
            await client.setex(self._make_key(key), ttl_seconds, "1")
        except RedisError as e:
            logger.warning(f"Redis unavailable, could not record lead {key} as dispatched: {e}")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
