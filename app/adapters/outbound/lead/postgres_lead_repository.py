"""Postgres-backed lead repository adapter."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.dtos.lead import ExtraFieldValue, Lead, NewLead
from app.application.ports.lead_repository import LeadRepository, serialize_detail_value
from app.domain.errors import NotFoundError, PersistenceError
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger

from .models import LeadDetailModel, LeadModel


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite returns naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostgresLeadRepository(LeadRepository):
    """Postgres implementation of lead repository."""

    def __init__(self) -> None:
        """Initialize Postgres repository."""
        pass

    def _model_to_dto(self, model: LeadModel) -> Lead:
        """
        Convert LeadModel to Lead DTO.

        Args:
            model: SQLAlchemy model instance

        Returns:
            Lead DTO
        """
        return Lead(
            id=model.id,
            form_type=model.form_type,
            source_url=model.source_url,
            ip=model.ip,
            name=model.name,
            phone_number=model.phone_number,
            email=model.email,
            is_verified=bool(model.is_verified),
            is_sent=bool(model.is_sent),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    def _find_lead_id(self, db: Session, phone_number: str) -> Optional[int]:
        row = db.query(LeadModel.id).filter(LeadModel.phone_number == phone_number).first()
        return row[0] if row else None

    async def create_if_absent(
        self, fields: NewLead, extra_fields: dict[str, ExtraFieldValue]
    ) -> tuple[int, bool]:
        """
        Create a lead and its details unless the phone number is known.

        The unique index on phone_number settles concurrent submissions: the
        loser's insert fails, is rolled back, and the winner's id is returned.

        Args:
            fields: Fixed-schema lead fields
            extra_fields: Form-specific fields

        Returns:
            Tuple of (lead_id, created)

        Raises:
            PersistenceError: If the write failed and was rolled back
        """
        db: Session = get_db_session()
        try:
            existing_id = self._find_lead_id(db, fields.phone_number)
            if existing_id is not None:
                return existing_id, False

            now = datetime.now(timezone.utc)
            model = LeadModel(created_at=now, updated_at=now, **fields.model_dump())
            db.add(model)
            db.flush()
            lead_id = model.id

            for key, value in extra_fields.items():
                db.add(
                    LeadDetailModel(
                        lead_id=lead_id,
                        lead_form_key=key,
                        lead_form_value=serialize_detail_value(value),
                        created_at=now,
                    )
                )

            db.commit()
            return lead_id, True
        except IntegrityError as e:
            db.rollback()
            winner_id = self._find_lead_id(db, fields.phone_number)
            if winner_id is not None:
                logger.info(f"Phone number conflict resolved to existing lead {winner_id}")
                return winner_id, False
            logger.error(f"Integrity error while creating lead: {str(e)}")
            raise PersistenceError("Lead could not be stored") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while creating lead: {str(e)}")
            raise PersistenceError("Lead could not be stored") from e
        finally:
            db.close()

    async def fetch_with_details(self, lead_id: int) -> dict[str, Any]:
        """
        Get a lead merged with its detail pairs.

        Args:
            lead_id: Lead identifier

        Returns:
            Flat mapping; detail keys override base fields

        Raises:
            NotFoundError: If no lead has this id
            PersistenceError: If the read failed
        """
        db: Session = get_db_session()
        try:
            model = db.query(LeadModel).filter(LeadModel.id == lead_id).first()
            if model is None:
                raise NotFoundError("Lead", lead_id)

            merged = self._model_to_dto(model).to_record()
            for detail in model.details:
                merged[detail.lead_form_key] = detail.lead_form_value
            return merged
        except SQLAlchemyError as e:
            logger.error(f"Database error while fetching lead {lead_id}: {str(e)}")
            raise PersistenceError("Lead could not be loaded") from e
        finally:
            db.close()

    async def get(self, lead_id: int) -> Optional[Lead]:
        db: Session = get_db_session()
        try:
            model = db.query(LeadModel).filter(LeadModel.id == lead_id).first()
            if model is None:
                return None
            return self._model_to_dto(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting lead {lead_id}: {str(e)}")
            raise PersistenceError("Lead could not be loaded") from e
        finally:
            db.close()

    async def list(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            Leads, most recently created first
        """
        db: Session = get_db_session()
        try:
            models = (
                db.query(LeadModel).order_by(LeadModel.created_at.desc(), LeadModel.id.desc()).all()
            )
            return [self._model_to_dto(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing leads: {str(e)}")
            raise PersistenceError("Leads could not be loaded") from e
        finally:
            db.close()

    async def update_flags(
        self,
        lead_id: int,
        is_verified: Optional[bool] = None,
        is_sent: Optional[bool] = None,
    ) -> None:
        db: Session = get_db_session()
        try:
            model = db.query(LeadModel).filter(LeadModel.id == lead_id).first()
            if model is None:
                raise NotFoundError("Lead", lead_id)

            if is_verified is not None:
                model.is_verified = is_verified
            if is_sent is not None:
                model.is_sent = is_sent
            model.updated_at = datetime.now(timezone.utc)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while updating flags for lead {lead_id}: {str(e)}")
            raise PersistenceError("Lead flags could not be updated") from e
        finally:
            db.close()
