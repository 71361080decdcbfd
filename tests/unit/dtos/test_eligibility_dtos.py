"""Unit tests for eligibility DTOs."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.application.dtos.eligibility import EligibilitySubmission, EligibilityUpdate

VALID = {
    "household": "Single",
    "citizenship": "Yes, Singapore Citizens",
    "requirement": "Yes",
    "household_income": "Yes",
    "ownership_status": "Yes, MOP completed",
    "private_property_ownership": "No",
    "first_time_applicant": "No",
    "name": "Raj",
    "email": "raj@example.com",
    "phone_number": "81234567",
}


def test_valid_submission():
    """Test a complete questionnaire validates."""
    submission = EligibilitySubmission(**VALID)

    assert submission.ownership_status == "Yes, MOP completed"


def test_missing_answer_is_rejected():
    """Test every answer is required."""
    data = dict(VALID)
    del data["citizenship"]

    with pytest.raises(PydanticValidationError):
        EligibilitySubmission(**data)


def test_bad_email_is_rejected():
    """Test the contact email is validated."""
    with pytest.raises(PydanticValidationError):
        EligibilitySubmission(**{**VALID, "email": "raj-at-example"})


def test_update_changes_contains_only_sent_fields():
    """Test a partial update reports only the fields that were set."""
    verified_at = datetime(2026, 3, 1, tzinfo=timezone.utc)
    update = EligibilityUpdate(verified_at=verified_at, send_discord=True)

    assert update.changes() == {"verified_at": verified_at, "send_discord": True}


def test_update_rejects_null_send_discord():
    """Test send_discord cannot be cleared with an explicit null."""
    with pytest.raises(PydanticValidationError):
        EligibilityUpdate(send_discord=None)


def test_update_allows_clearing_nullable_answers():
    """Test nullable answer fields still accept an explicit null."""
    update = EligibilityUpdate(household=None, send_discord=False)

    assert update.changes() == {"household": None, "send_discord": False}
