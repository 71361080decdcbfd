"""Unit tests for the eligibility classifier."""

import pytest

from app.application.dtos.eligibility import EligibilityAnswers
from app.application.use_cases.classify_eligibility import ClassifyEligibility, classify


def _answers(**overrides) -> EligibilityAnswers:
    data = {
        "household": "Couple",
        "citizenship": "Yes, Singapore Citizens",
        "requirement": "Yes",
        "household_income": "Yes",
        "ownership_status": ClassifyEligibility.NO_HDB,
        "private_property_ownership": "No",
        "first_time_applicant": "Yes",
    }
    data.update(overrides)
    return EligibilityAnswers(**data)


@pytest.mark.parametrize(
    "ownership_status, result, listing",
    [
        (ClassifyEligibility.MOP_COMPLETED, "congratulation", "congratulation"),
        (ClassifyEligibility.WITHIN_MOP, "mop", "appeal-mop"),
        (ClassifyEligibility.NO_HDB, "appeal", "appeal-mop"),
    ],
)
def test_ownership_status_decides_outcome(ownership_status, result, listing):
    """Test qualifying applicants are routed by HDB ownership."""
    outcome = classify(_answers(ownership_status=ownership_status))

    assert outcome.result == result
    assert outcome.listing == listing


@pytest.mark.parametrize(
    "overrides",
    [
        {"citizenship": ClassifyEligibility.NOT_CITIZEN},
        {"requirement": "No"},
        {"household_income": "No"},
        {"private_property_ownership": "Yes"},
    ],
)
def test_disqualifying_answers(overrides):
    """Test each disqualifying answer wins over the ownership status."""
    outcome = classify(_answers(ownership_status=ClassifyEligibility.MOP_COMPLETED, **overrides))

    assert outcome.result == "disqualification"
    assert outcome.listing == "appeal-mop"


def test_unrecognized_ownership_status_falls_through():
    """Test an unknown ownership answer is disqualified."""
    outcome = classify(_answers(ownership_status="Prefer not to say"))

    assert outcome.result == "disqualification"
    assert outcome.listing == "appeal-mop"


def test_answers_are_matched_exactly():
    """Test answers are compared as exact strings."""
    outcome = classify(_answers(ownership_status="yes, mop completed"))

    assert outcome.result == "disqualification"
