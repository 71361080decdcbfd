"""No-op idempotency store adapter used when Redis is not configured."""

from app.application.ports.idempotency_store import IdempotencyStore


class NoOpIdempotencyStore(IdempotencyStore):
    """Remembers nothing, so every dispatch goes out."""

    async def is_processed(self, key: str) -> bool:
        return False

    async def mark_processed(self, key: str, ttl_seconds: int) -> None:
        pass
