"""SQLAlchemy ORM models for eligibility leads."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

# Reuse the lead declarative base so one metadata covers every table
from app.adapters.outbound.lead.models import Base


class EligibilityLeadModel(Base):
    """SQLAlchemy model for eligibility_leads table."""

    __tablename__ = "eligibility_leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    household = Column(String, nullable=True)
    citizenship = Column(String, nullable=True)
    requirement = Column(String, nullable=True)
    household_income = Column(String, nullable=True)
    ownership_status = Column(String, nullable=True)
    private_property_ownership = Column(String, nullable=True)
    first_time_applicant = Column(String, nullable=True)
    name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    verified_at = Column(DateTime(timezone=True), nullable=True)
    send_discord = Column(Boolean, nullable=False, default=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # soft-delete tombstone
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
