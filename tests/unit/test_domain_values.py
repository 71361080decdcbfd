"""Unit tests for domain value objects, entities and errors."""

import pytest

from app.domain.entities.intake_session import IntakeSession
from app.domain.errors import UpstreamError
from app.domain.value_objects.compliance_status import ComplianceStatus
from app.domain.value_objects.form_type import FormType


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("hdb", FormType.HDB),
        (" Condo ", FormType.CONDO),
        ("LANDED", FormType.LANDED),
        ("commercial", FormType.OTHER),
        ("", FormType.OTHER),
    ],
)
def test_form_type_parse(raw, expected):
    """Test raw form types map to known kinds or OTHER."""
    assert FormType.parse(raw) is expected


def test_only_clear_is_forwardable():
    """Test only clear leads go to frequency control."""
    assert [status for status in ComplianceStatus if status.forwardable] == [
        ComplianceStatus.CLEAR
    ]


def test_intake_session_marks_lead_sent():
    """Test the session flag flips once a lead is sent."""
    session = IntakeSession()
    assert session.lead_sent is False

    session.mark_lead_sent()

    assert session.lead_sent is True


@pytest.mark.parametrize(
    "status_code, retryable",
    [(None, True), (500, True), (503, True), (400, False), (404, False)],
)
def test_upstream_error_retryable(status_code, retryable):
    """Test transport errors and 5xx are retryable, 4xx are not."""
    assert UpstreamError("svc", "failed", status_code).retryable is retryable
