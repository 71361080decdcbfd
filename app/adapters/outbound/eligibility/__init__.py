"""Eligibility lead repository adapters."""

from app.adapters.outbound.eligibility.eligibility_lead_repository import (
    InMemoryEligibilityLeadRepository,
)
from app.adapters.outbound.eligibility.postgres_eligibility_lead_repository import (
    PostgresEligibilityLeadRepository,
)

__all__ = [
    "InMemoryEligibilityLeadRepository",
    "PostgresEligibilityLeadRepository",
]
