"""Postgres-backed eligibility lead repository adapter."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.dtos.eligibility import EligibilityLead, EligibilitySubmission
from app.application.ports.eligibility_lead_repository import EligibilityLeadRepository
from app.domain.errors import NotFoundError, PersistenceError
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger

from .models import EligibilityLeadModel

_UPDATABLE_FIELDS = frozenset(
    {
        "household",
        "citizenship",
        "requirement",
        "household_income",
        "ownership_status",
        "private_property_ownership",
        "first_time_applicant",
        "name",
        "email",
        "phone_number",
        "verified_at",
        "send_discord",
    }
)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostgresEligibilityLeadRepository(EligibilityLeadRepository):
    """Postgres implementation of eligibility lead repository."""

    def _model_to_dto(self, model: EligibilityLeadModel) -> EligibilityLead:
        """
        Convert EligibilityLeadModel to EligibilityLead DTO.

        Args:
            model: SQLAlchemy model instance

        Returns:
            EligibilityLead DTO
        """
        return EligibilityLead(
            id=model.id,
            household=model.household,
            citizenship=model.citizenship,
            requirement=model.requirement,
            household_income=model.household_income,
            ownership_status=model.ownership_status,
            private_property_ownership=model.private_property_ownership,
            first_time_applicant=model.first_time_applicant,
            name=model.name,
            email=model.email,
            phone_number=model.phone_number,
            verified_at=_aware(model.verified_at),
            send_discord=bool(model.send_discord),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
            deleted_at=_aware(model.deleted_at),
        )

    def _live_query(self, db: Session):
        return db.query(EligibilityLeadModel).filter(EligibilityLeadModel.deleted_at.is_(None))

    async def create(self, submission: EligibilitySubmission) -> EligibilityLead:
        db: Session = get_db_session()
        try:
            now = datetime.now(timezone.utc)
            model = EligibilityLeadModel(created_at=now, updated_at=now, **submission.model_dump())
            db.add(model)
            db.commit()
            db.refresh(model)
            return self._model_to_dto(model)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while creating eligibility lead: {str(e)}")
            raise PersistenceError("Eligibility lead could not be stored") from e
        finally:
            db.close()

    async def get(self, lead_id: int) -> Optional[EligibilityLead]:
        db: Session = get_db_session()
        try:
            model = self._live_query(db).filter(EligibilityLeadModel.id == lead_id).first()
            return self._model_to_dto(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting eligibility lead {lead_id}: {str(e)}")
            raise PersistenceError("Eligibility lead could not be loaded") from e
        finally:
            db.close()

    async def list(self) -> list[EligibilityLead]:
        db: Session = get_db_session()
        try:
            models = self._live_query(db).order_by(
                EligibilityLeadModel.created_at.desc(), EligibilityLeadModel.id.desc()
            )
            return [self._model_to_dto(model) for model in models.all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing eligibility leads: {str(e)}")
            raise PersistenceError("Eligibility leads could not be loaded") from e
        finally:
            db.close()

    async def update(self, lead_id: int, changes: dict[str, Any]) -> EligibilityLead:
        db: Session = get_db_session()
        try:
            model = self._live_query(db).filter(EligibilityLeadModel.id == lead_id).first()
            if model is None:
                raise NotFoundError("EligibilityLead", lead_id)

            for key, value in changes.items():
                if key in _UPDATABLE_FIELDS:
                    setattr(model, key, value)
            model.updated_at = datetime.now(timezone.utc)
            db.commit()
            db.refresh(model)
            return self._model_to_dto(model)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while updating eligibility lead {lead_id}: {str(e)}")
            raise PersistenceError("Eligibility lead could not be updated") from e
        finally:
            db.close()

    async def soft_delete(self, lead_id: int) -> None:
        db: Session = get_db_session()
        try:
            model = self._live_query(db).filter(EligibilityLeadModel.id == lead_id).first()
            if model is None:
                raise NotFoundError("EligibilityLead", lead_id)

            now = datetime.now(timezone.utc)
            model.deleted_at = now
            model.updated_at = now
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while deleting eligibility lead {lead_id}: {str(e)}")
            raise PersistenceError("Eligibility lead could not be deleted") from e
        finally:
            db.close()
