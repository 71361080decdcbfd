"""Eligibility questionnaire DTOs."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from app.application.dtos.base import DTO
from app.application.dtos.validators import require_non_empty, validate_email_address


class EligibilityAnswers(DTO):
    """Questionnaire answers consumed by the classifier."""

    household: str
    citizenship: str
    requirement: str
    household_income: str
    ownership_status: str
    private_property_ownership: str
    first_time_applicant: str


class EligibilitySubmission(EligibilityAnswers):
    """Inbound eligibility form payload."""

    name: str
    phone_number: str
    email: str

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "household": "Couple",
                "citizenship": "Yes, Singapore Citizens",
                "requirement": "Yes",
                "household_income": "Yes",
                "ownership_status": "No, do not own any HDB",
                "private_property_ownership": "No",
                "first_time_applicant": "Yes",
                "name": "John Doe",
                "email": "johndoe@example.com",
                "phone_number": "91234567",
            }
        }

    @field_validator(
        "household",
        "citizenship",
        "requirement",
        "household_income",
        "ownership_status",
        "private_property_ownership",
        "first_time_applicant",
        "name",
        "phone_number",
    )
    @classmethod
    def check_non_empty(cls, value: str) -> str:
        return require_non_empty(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email_address(value)


class EligibilityUpdate(DTO):
    """Partial update of an eligibility lead."""

    household: Optional[str] = None
    citizenship: Optional[str] = None
    requirement: Optional[str] = None
    household_income: Optional[str] = None
    ownership_status: Optional[str] = None
    private_property_ownership: Optional[str] = None
    first_time_applicant: Optional[str] = None
    name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    verified_at: Optional[datetime] = None
    send_discord: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else validate_email_address(value)

    @field_validator("send_discord")
    @classmethod
    def check_send_discord(cls, value: Optional[bool]) -> bool:
        # Column is NOT NULL; omit the field to leave it unchanged
        if value is None:
            raise ValueError("must be true or false")
        return value

    def changes(self) -> dict:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


class EligibilityLead(DTO):
    """Stored eligibility lead."""

    id: int
    household: Optional[str] = None
    citizenship: Optional[str] = None
    requirement: Optional[str] = None
    household_income: Optional[str] = None
    ownership_status: Optional[str] = None
    private_property_ownership: Optional[str] = None
    first_time_applicant: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    verified_at: Optional[datetime] = None
    send_discord: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class EligibilityOutcome(DTO):
    """Classifier result and the listing page the visitor is sent to."""

    result: str
    listing: str


class SubmitEligibilityResult(DTO):
    """Outcome of an eligibility submission."""

    lead_id: int
    result: str
    listing: str
