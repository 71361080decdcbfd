"""Eligibility lead repository port."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from app.application.dtos.eligibility import EligibilityLead, EligibilitySubmission


class EligibilityLeadRepository(ABC):
    """Port interface for eligibility lead repository."""

    @abstractmethod
    async def create(self, submission: EligibilitySubmission) -> EligibilityLead:
        """
        Persist a questionnaire submission.

        Raises:
            PersistenceError: If the write failed
        """
        pass

    @abstractmethod
    async def get(self, lead_id: int) -> Optional[EligibilityLead]:
        """Get a lead by id; soft-deleted leads are treated as missing."""
        pass

    @abstractmethod
    async def list(self) -> list[EligibilityLead]:
        """List leads that are not soft-deleted, most recent first."""
        pass

    @abstractmethod
    async def update(self, lead_id: int, changes: dict[str, Any]) -> EligibilityLead:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If the lead is missing or soft-deleted
            PersistenceError: If the write failed
        """
        pass

    @abstractmethod
    async def soft_delete(self, lead_id: int) -> None:
        """
        Tombstone a lead; it is kept but excluded from get and list.

        Raises:
            NotFoundError: If the lead is missing or already soft-deleted
        """
        pass
