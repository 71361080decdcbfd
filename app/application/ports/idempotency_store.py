"""Idempotency store port."""

from abc import ABC, abstractmethod


class IdempotencyStore(ABC):
    """Remembers which lead ids the CRM webhook has already accepted."""

    @abstractmethod
    async def is_processed(self, key: str) -> bool:
        """
        Check whether a lead was already delivered.

        Args:
            key: Lead id as a string

        Returns:
            True if a delivery for this lead was recorded
        """
        pass

    @abstractmethod
    async def mark_processed(self, key: str, ttl_seconds: int) -> None:
        """
        Record a successful delivery.

        Args:
            key: Lead id as a string
            ttl_seconds: How long the record is kept
        """
        pass
