"""Unit tests for HTTP routes."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from app.adapters.inbound.http import routes
from app.adapters.inbound.http.routes import router
from app.adapters.outbound.eligibility.eligibility_lead_repository import (
    InMemoryEligibilityLeadRepository,
)
from app.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from app.adapters.outbound.lead.lead_repository import InMemoryLeadRepository
from app.application.use_cases.dispatch_lead import NotificationDispatcher
from app.application.use_cases.evaluate_compliance import ComplianceGateway
from app.application.use_cases.submit_eligibility import SubmitEligibilityUseCase
from app.application.use_cases.submit_lead import SubmitLeadUseCase
from app.domain.errors import PersistenceError

LEAD_BODY = {
    "form_type": "hdb",
    "source_url": "https://example.com/hdb",
    "ip": "203.0.113.5",
    "name": "A",
    "phone_number": "91234567",
    "email": "a@b.test",
    "town": "Tampines",
}

ELIGIBILITY_BODY = {
    "household": "Couple",
    "citizenship": "Yes, Singapore Citizens",
    "requirement": "Yes",
    "household_income": "Yes",
    "ownership_status": "Yes, still within MOP",
    "private_property_ownership": "No",
    "first_time_applicant": "Yes",
    "name": "John Doe",
    "email": "johndoe@example.com",
    "phone_number": "91234567",
}


@pytest.fixture
def sinks():
    junk_checker = AsyncMock()
    junk_checker.is_junk.return_value = False
    dnc_registry = AsyncMock()
    dnc_registry.is_listed.return_value = False
    ip_resolver = AsyncMock()
    ip_resolver.resolve.return_value = "198.51.100.1"
    return {
        "junk_checker": junk_checker,
        "dnc_registry": dnc_registry,
        "ip_resolver": ip_resolver,
        "frequency_webhook": AsyncMock(),
        "crm_webhook": AsyncMock(),
        "chat_notifier": AsyncMock(),
    }


@pytest.fixture
def lead_repository():
    return InMemoryLeadRepository()


@pytest.fixture
def eligibility_repository():
    return InMemoryEligibilityLeadRepository()


@pytest.fixture
def app(sinks, lead_repository, eligibility_repository):
    """Create FastAPI app with router wired to in-memory stores and mocked sinks."""
    gateway = ComplianceGateway(
        sinks["junk_checker"],
        sinks["dnc_registry"],
        sinks["ip_resolver"],
        sinks["frequency_webhook"],
    )
    dispatcher = NotificationDispatcher(
        sinks["crm_webhook"], sinks["chat_notifier"], NoOpIdempotencyStore()
    )
    submit_lead = SubmitLeadUseCase(lead_repository, gateway, dispatcher)
    submit_eligibility = SubmitEligibilityUseCase(eligibility_repository)

    app = FastAPI()
    app.include_router(router)
    with patch.object(routes, "_lead_repository", lead_repository), patch.object(
        routes, "_submit_lead_use_case", submit_lead
    ), patch.object(routes, "_eligibility_repository", eligibility_repository), patch.object(
        routes, "_submit_eligibility_use_case", submit_eligibility
    ):
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_create_lead_returns_id_and_sets_cookie(client, sinks):
    """Test a clear lead returns its id, lead_sent, and the session cookie."""
    response = client.post("/leads", json=LEAD_BODY)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["lead_id"] == 1
    assert data["lead_sent"] is True
    assert response.cookies.get("lead_sent") == "1"
    sinks["chat_notifier"].notify_lead.assert_awaited_once()


def test_resubmission_returns_same_id(client, sinks):
    """Test a second submission with the same phone number is deduplicated."""
    first = client.post("/leads", json=LEAD_BODY).json()
    second = client.post("/leads", json={**LEAD_BODY, "town": "Bedok"})

    assert second.status_code == status.HTTP_200_OK
    assert second.json()["lead_id"] == first["lead_id"]
    assert sinks["chat_notifier"].notify_lead.await_count == 1


def test_create_lead_validation_error(client):
    """Test invalid input yields 400 with per-field errors."""
    body = dict(LEAD_BODY)
    del body["phone_number"]
    body["email"] = "not-an-email"

    response = client.post("/leads", json=body)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Validation error."
    assert data["errors"]["phone_number"] == ["The phone number field is required."]
    assert "email" in data["errors"]


def test_create_lead_rejects_non_object_body(client):
    """Test a JSON array body is a validation error."""
    response = client.post("/leads", json=["not", "an", "object"])

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "body" in response.json()["errors"]


def test_create_lead_store_failure_returns_generic_error(client):
    """Test a persistence failure hides internals behind a generic message."""
    failing = AsyncMock()
    failing.execute.side_effect = PersistenceError("connection reset")

    with patch.object(routes, "_submit_lead_use_case", failing):
        response = client.post("/leads", json=LEAD_BODY)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": routes.LEAD_ERROR_MESSAGE}


def test_get_lead_merges_details(client):
    """Test the lead view carries its form-specific details."""
    lead_id = client.post("/leads", json=LEAD_BODY).json()["lead_id"]

    response = client.get(f"/leads/{lead_id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["town"] == "Tampines"
    assert data["is_sent"] is True


def test_get_unknown_lead_returns_404(client):
    """Test an unknown lead id returns 404."""
    response = client.get("/leads/404")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"success": False, "message": "Lead not found."}


def test_list_leads(client):
    """Test leads are listed."""
    client.post("/leads", json=LEAD_BODY)

    response = client.get("/leads")

    assert response.status_code == status.HTTP_200_OK
    assert len(response.json()["data"]) == 1


def test_create_eligibility_lead(client):
    """Test an eligibility submission is stored and classified."""
    response = client.post("/eligibility/leads", json=ELIGIBILITY_BODY)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "status": "success",
        "message": "Form submitted successfully",
        "data": {"lead_id": 1, "result": "mop", "listing": "appeal-mop"},
    }


def test_create_eligibility_lead_validation_error(client):
    """Test a missing answer is rejected."""
    body = dict(ELIGIBILITY_BODY)
    del body["ownership_status"]

    response = client.post("/eligibility/leads", json=body)

    assert response.status_code == 422


def test_update_and_delete_eligibility_lead(client):
    """Test partial update then soft delete of an eligibility lead."""
    lead_id = client.post("/eligibility/leads", json=ELIGIBILITY_BODY).json()["data"]["lead_id"]

    updated = client.put(f"/eligibility/leads/{lead_id}", json={"send_discord": True})
    assert updated.status_code == status.HTTP_200_OK
    assert updated.json()["data"]["send_discord"] is True
    assert updated.json()["data"]["name"] == "John Doe"

    deleted = client.delete(f"/eligibility/leads/{lead_id}")
    assert deleted.status_code == status.HTTP_200_OK

    assert client.get(f"/eligibility/leads/{lead_id}").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/eligibility/leads").json()["data"] == []


def test_update_unknown_eligibility_lead_returns_404(client):
    """Test updating an unknown eligibility lead returns 404."""
    response = client.put("/eligibility/leads/77", json={"name": "X"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_extra_fields_named_like_base_fields_do_not_change_dispatch(client, sinks):
    """Test extras called id, created_at and is_sent leave the new lead's identity intact."""
    first_id = client.post("/leads", json=LEAD_BODY).json()["lead_id"]
    body = dict(
        LEAD_BODY,
        phone_number="98887777",
        id=str(first_id),
        created_at="2020-01-01T00:00:00",
        is_sent="1",
    )

    response = client.post("/leads", json=body)

    assert response.status_code == status.HTTP_200_OK
    second_id = response.json()["lead_id"]
    assert second_id != first_id
    assert sinks["crm_webhook"].post.await_count == 2
    call = sinks["crm_webhook"].post.await_args
    assert call.args[0]["id"] == second_id
    assert call.args[0]["created_at"] == "2020-01-01T00:00:00"
    assert call.kwargs["idempotency_key"] == str(second_id)


def test_update_eligibility_lead_rejects_null_send_discord(client):
    """Test send_discord cannot be set to null."""
    lead_id = client.post("/eligibility/leads", json=ELIGIBILITY_BODY).json()["data"]["lead_id"]

    response = client.put(f"/eligibility/leads/{lead_id}", json={"send_discord": None})

    assert response.status_code == 422
    stored = client.get(f"/eligibility/leads/{lead_id}").json()["data"]
    assert stored["send_discord"] is False


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("get", "/eligibility/leads", {}),
        ("get", "/eligibility/leads/1", {}),
        ("put", "/eligibility/leads/1", {"json": {"send_discord": True}}),
        ("delete", "/eligibility/leads/1", {}),
    ],
)
def test_eligibility_store_failure_returns_generic_error(client, method, path, kwargs):
    """Test storage failures on eligibility reads and writes return a JSON 500."""
    failing = AsyncMock()
    failing.list.side_effect = PersistenceError("connection reset")
    failing.get.side_effect = PersistenceError("connection reset")
    failing.update.side_effect = PersistenceError("connection reset")
    failing.soft_delete.side_effect = PersistenceError("connection reset")

    with patch.object(routes, "_eligibility_repository", failing):
        response = getattr(client, method)(path, **kwargs)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"success": False, "message": routes.LEAD_ERROR_MESSAGE}
