"""Lead DTOs."""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import ConfigDict, IPvAnyAddress, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.application.dtos.base import DTO
from app.application.dtos.validators import (
    require_non_empty,
    stringify,
    to_validation_error,
    validate_email_address,
    validate_url,
)

# Form inputs that are never stored as lead details
RESERVED_DETAIL_KEYS = frozenset({"user_otp", "wp_otp", "lead_id"})

ExtraFieldValue = Union[str, list[str]]


class NewLead(DTO):
    """Fixed-schema fields of a lead about to be stored."""

    form_type: str
    source_url: str
    ip: str
    name: str
    phone_number: str
    email: str


class Lead(DTO):
    """Stored lead record."""

    id: int
    form_type: str
    source_url: Optional[str] = None
    ip: Optional[str] = None
    name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    is_verified: bool = False
    is_sent: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_record(self) -> dict[str, Any]:
        """JSON-friendly mapping of the base fields."""
        return self.model_dump(mode="json")


class LeadSubmission(DTO):
    """Inbound lead form payload; unknown keys are kept as form-specific extras."""

    model_config = ConfigDict(frozen=True, extra="allow")

    form_type: str
    source_url: str
    ip: IPvAnyAddress
    name: str
    phone_number: str
    email: str
    user_otp: Optional[str] = None
    wp_otp: Optional[str] = None

    @field_validator("form_type", "name", "phone_number")
    @classmethod
    def check_non_empty(cls, value: str) -> str:
        return require_non_empty(value)

    @field_validator("source_url")
    @classmethod
    def check_source_url(cls, value: str) -> str:
        return validate_url(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email_address(value)

    @field_validator("user_otp", "wp_otp", mode="before")
    @classmethod
    def otp_as_string(cls, value: Any) -> Optional[str]:
        return None if value is None else stringify(value)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "LeadSubmission":
        """
        Validate a raw request body.

        Args:
            payload: Decoded JSON body

        Returns:
            Validated submission

        Raises:
            ValidationError: With per-field messages if the payload is invalid
        """
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as err:
            raise to_validation_error(err) from err

    def to_new_lead(self) -> NewLead:
        """Fixed-schema portion of the submission."""
        return NewLead(
            form_type=self.form_type,
            source_url=self.source_url,
            ip=str(self.ip),
            name=self.name,
            phone_number=self.phone_number,
            email=self.email,
        )

    def extra_fields(self) -> dict[str, ExtraFieldValue]:
        """Submitted fields outside the fixed schema, minus reserved keys."""
        extras: dict[str, ExtraFieldValue] = {}
        for key, value in (self.model_extra or {}).items():
            if key in RESERVED_DETAIL_KEYS:
                continue
            if isinstance(value, (list, tuple)):
                extras[key] = [stringify(item) for item in value]
            else:
                extras[key] = stringify(value)
        return extras


class SubmitLeadResult(DTO):
    """Outcome of a lead submission."""

    lead_id: int
    created: bool
    status: Optional[str] = None
    dispatched: bool = False
    lead_sent: bool = False
