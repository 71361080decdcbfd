"""HTTP routes."""

from uuid import uuid4

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.adapters.inbound.http.schemas import (
    EligibilityResultData,
    EligibilitySubmitResponse,
    LeadCreatedResponse,
    ValidationErrorResponse,
)
from app.application.dtos.eligibility import EligibilitySubmission, EligibilityUpdate
from app.application.dtos.lead import LeadSubmission
from app.domain.entities.intake_session import IntakeSession
from app.domain.errors import NotFoundError, PersistenceError, ValidationError
from app.infrastructure.logging.logger import log_intake, logger
from app.infrastructure.wiring.dependencies import (
    create_eligibility_lead_repository,
    create_lead_repository,
    create_submit_eligibility_use_case,
    create_submit_lead_use_case,
)

router = APIRouter()

# Read endpoints share the repositories the use cases write to
_lead_repository = create_lead_repository()
_eligibility_repository = create_eligibility_lead_repository()
_submit_lead_use_case = create_submit_lead_use_case(_lead_repository)
_submit_eligibility_use_case = create_submit_eligibility_use_case(_eligibility_repository)

LEAD_SENT_COOKIE = "lead_sent"
LEAD_ERROR_MESSAGE = "An error occurred while processing the lead."


def _lead_not_found() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"success": False, "message": "Lead not found."},
    )


def _storage_failed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": LEAD_ERROR_MESSAGE},
    )


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.get("/leads", status_code=status.HTTP_200_OK)
async def list_leads() -> JSONResponse:
    """
    List leads, most recent first.

    Returns:
        Leads without their details
    """
    try:
        leads = await _lead_repository.list()
    except PersistenceError:
        return _storage_failed()
    return JSONResponse(content={"success": True, "data": [lead.to_record() for lead in leads]})


@router.post(
    "/leads",
    status_code=status.HTTP_200_OK,
    response_model=LeadCreatedResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}},
)
async def create_lead(request: Request) -> JSONResponse:
    """
    Capture a lead from a property form.

    The body carries the fixed fields (form_type, source_url, ip, name,
    phone_number, email) plus any form-specific fields, which are stored as
    lead details. A phone number seen before returns the existing lead id.

    Args:
        request: FastAPI request object (raw JSON body)

    Returns:
        Lead id, or a validation / generic error body
    """
    request_id = str(uuid4())

    try:
        payload = await request.json()
    except ValueError:
        payload = None

    try:
        if not isinstance(payload, dict):
            raise ValidationError({"body": ["The request body must be a JSON object."]})
        submission = LeadSubmission.from_payload(payload)
    except ValidationError as err:
        log_intake(request_id, "http", outcome="validation_failed", fields=sorted(err.errors))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationErrorResponse(errors=err.errors).model_dump(),
        )

    session = IntakeSession(lead_sent=request.cookies.get(LEAD_SENT_COOKIE) == "1")

    log_intake(
        request_id,
        "http",
        form_type=submission.form_type,
        extra_field_count=len(submission.extra_fields()),
    )

    try:
        result = await _submit_lead_use_case.execute(
            submission, session=session, request_id=request_id
        )
    except PersistenceError:
        log_intake(request_id, "http", outcome="persistence_failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": LEAD_ERROR_MESSAGE},
        )

    log_intake(
        request_id,
        "http",
        lead_id=result.lead_id,
        created=result.created,
        compliance_status=result.status,
        dispatched=result.dispatched,
    )

    response = JSONResponse(
        content=LeadCreatedResponse(lead_id=result.lead_id, lead_sent=result.lead_sent).model_dump()
    )
    if result.lead_sent:
        response.set_cookie(LEAD_SENT_COOKIE, "1", httponly=True, samesite="lax")
    return response


@router.get("/leads/{lead_id}", status_code=status.HTTP_200_OK)
async def get_lead(lead_id: int) -> JSONResponse:
    """
    Get a lead merged with its form-specific details.

    Args:
        lead_id: Lead identifier

    Returns:
        Merged lead, or 404 if unknown
    """
    try:
        lead = await _lead_repository.fetch_with_details(lead_id)
    except NotFoundError:
        return _lead_not_found()
    except PersistenceError:
        return _storage_failed()
    return JSONResponse(content={"success": True, "data": lead})


@router.get("/eligibility/leads", status_code=status.HTTP_200_OK)
async def list_eligibility_leads() -> JSONResponse:
    """
    List eligibility leads that are not soft-deleted.

    Returns:
        Eligibility leads, most recent first
    """
    try:
        leads = await _eligibility_repository.list()
    except PersistenceError:
        logger.error("Eligibility leads could not be listed")
        return _storage_failed()
    return JSONResponse(
        content={"success": True, "data": [lead.model_dump(mode="json") for lead in leads]}
    )


@router.post(
    "/eligibility/leads",
    status_code=status.HTTP_200_OK,
    response_model=EligibilitySubmitResponse,
)
async def create_eligibility_lead(submission: EligibilitySubmission) -> JSONResponse:
    """
    Store an eligibility questionnaire and classify it.

    Args:
        submission: Questionnaire answers and contact details (422 if invalid)

    Returns:
        Stored lead id with result and listing target
    """
    try:
        result = await _submit_eligibility_use_case.execute(submission)
    except PersistenceError:
        logger.error("Eligibility lead could not be stored")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Database Insert Failed"},
        )

    body = EligibilitySubmitResponse(
        data=EligibilityResultData(
            lead_id=result.lead_id, result=result.result, listing=result.listing
        )
    )
    return JSONResponse(content=body.model_dump())


@router.get("/eligibility/leads/{lead_id}", status_code=status.HTTP_200_OK)
async def get_eligibility_lead(lead_id: int) -> JSONResponse:
    """
    Get an eligibility lead.

    Args:
        lead_id: Lead identifier

    Returns:
        Eligibility lead, or 404 if unknown or soft-deleted
    """
    try:
        lead = await _eligibility_repository.get(lead_id)
    except PersistenceError:
        logger.error("Eligibility lead %s could not be read", lead_id)
        return _storage_failed()
    if lead is None:
        return _lead_not_found()
    return JSONResponse(content={"success": True, "data": lead.model_dump(mode="json")})


@router.put("/eligibility/leads/{lead_id}", status_code=status.HTTP_200_OK)
async def update_eligibility_lead(lead_id: int, update: EligibilityUpdate) -> JSONResponse:
    """
    Partially update an eligibility lead (e.g. verified_at, send_discord).

    Args:
        lead_id: Lead identifier
        update: Fields to change

    Returns:
        Updated lead, or 404 if unknown or soft-deleted
    """
    try:
        lead = await _eligibility_repository.update(lead_id, update.changes())
    except NotFoundError:
        return _lead_not_found()
    except PersistenceError:
        logger.error("Eligibility lead %s could not be updated", lead_id)
        return _storage_failed()
    return JSONResponse(content={"success": True, "data": lead.model_dump(mode="json")})


@router.delete("/eligibility/leads/{lead_id}", status_code=status.HTTP_200_OK)
async def delete_eligibility_lead(lead_id: int) -> JSONResponse:
    """
    Soft-delete an eligibility lead. The row is kept but hidden from reads.

    Args:
        lead_id: Lead identifier

    Returns:
        Confirmation, or 404 if unknown or already deleted
    """
    try:
        await _eligibility_repository.soft_delete(lead_id)
    except NotFoundError:
        return _lead_not_found()
    except PersistenceError:
        logger.error("Eligibility lead %s could not be deleted", lead_id)
        return _storage_failed()
    return JSONResponse(content={"success": True, "message": "Lead deleted."})
