"""In-memory eligibility lead repository adapter."""

from datetime import datetime, timezone
from typing import Any, Optional

from app.application.dtos.eligibility import EligibilityLead, EligibilitySubmission
from app.application.ports.eligibility_lead_repository import EligibilityLeadRepository
from app.domain.errors import NotFoundError


class InMemoryEligibilityLeadRepository(EligibilityLeadRepository):
    """In-memory implementation of eligibility lead repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[int, EligibilityLead] = {}
        self._next_id = 1

    def _live(self, lead_id: int) -> Optional[EligibilityLead]:
        lead = self._storage.get(lead_id)
        if lead is None or lead.deleted_at is not None:
            return None
        return lead

    async def create(self, submission: EligibilitySubmission) -> EligibilityLead:
        now = datetime.now(timezone.utc)
        lead = EligibilityLead(
            id=self._next_id,
            created_at=now,
            updated_at=now,
            **submission.model_dump(),
        )
        self._next_id += 1
        self._storage[lead.id] = lead
        return lead

    async def get(self, lead_id: int) -> Optional[EligibilityLead]:
        return self._live(lead_id)

    async def list(self) -> list[EligibilityLead]:
        live = [lead for lead in self._storage.values() if lead.deleted_at is None]
        return sorted(live, key=lambda lead: (lead.created_at, lead.id), reverse=True)

    async def update(self, lead_id: int, changes: dict[str, Any]) -> EligibilityLead:
        lead = self._live(lead_id)
        if lead is None:
            raise NotFoundError("EligibilityLead", lead_id)

        updated = lead.model_copy(update={**changes, "updated_at": datetime.now(timezone.utc)})
        self._storage[lead_id] = updated
        return updated

    async def soft_delete(self, lead_id: int) -> None:
        lead = self._live(lead_id)
        if lead is None:
            raise NotFoundError("EligibilityLead", lead_id)

        now = datetime.now(timezone.utc)
        self._storage[lead_id] = lead.model_copy(update={"deleted_at": now, "updated_at": now})
