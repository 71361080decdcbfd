"""SQLAlchemy ORM models for leads."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class LeadModel(Base):
    """SQLAlchemy model for leads table."""

    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, autoincrement=True)
    form_type = Column(String, nullable=False)
    source_url = Column(String, nullable=True)
    ip = Column(String, nullable=True)
    name = Column(String, nullable=True)
    phone_number = Column(String, nullable=True, unique=True, index=True)  # dedupe key
    email = Column(String, nullable=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    is_sent = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    details = relationship(
        "LeadDetailModel",
        cascade="all, delete-orphan",
        order_by="LeadDetailModel.id",
        passive_deletes=True,
    )


class LeadDetailModel(Base):
    """SQLAlchemy model for lead_details table (form-specific key/value pairs)."""

    __tablename__ = "lead_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(
        Integer, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True
    )
    lead_form_key = Column(String, nullable=False)
    lead_form_value = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
