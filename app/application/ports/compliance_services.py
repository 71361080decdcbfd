"""Compliance service ports: junk detection, do-not-call registry, IP resolution."""

from abc import ABC, abstractmethod
from typing import Optional


class JunkChecker(ABC):
    """Port interface for content moderation."""

    @abstractmethod
    async def is_junk(self, text: str) -> bool:
        """
        Screen free text for junk content.

        Args:
            text: Lead summary serialized as text

        Returns:
            True if the moderator flagged any terms

        Raises:
            UpstreamError: If the moderation call failed
        """
        pass


class DncRegistry(ABC):
    """Port interface for do-not-call registry lookups."""

    @abstractmethod
    async def is_listed(self, email: str, phone_number: str) -> bool:
        """
        Check whether a contact is on the do-not-call registry.

        Raises:
            UpstreamError: If the lookup failed
        """
        pass


class IpResolver(ABC):
    """Port interface for public IP resolution."""

    @abstractmethod
    async def resolve(self) -> Optional[str]:
        """Return the public IP address, or None if it could not be resolved."""
        pass
