"""HTTP adapter response schemas."""

from pydantic import BaseModel, ConfigDict


class LeadCreatedResponse(BaseModel):
    """Response to a lead submission."""

    lead_id: int
    lead_sent: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"lead_id": 1, "lead_sent": True},
        }
    )


class ValidationErrorResponse(BaseModel):
    """Per-field validation failure."""

    success: bool = False
    message: str = "Validation error."
    errors: dict[str, list[str]]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Validation error.",
                "errors": {"phone_number": ["The phone number field is required."]},
            }
        }
    )


class EligibilityResultData(BaseModel):
    """Stored eligibility lead id with its classification."""

    lead_id: int
    result: str
    listing: str


class EligibilitySubmitResponse(BaseModel):
    """Response to an eligibility submission."""

    status: str = "success"
    message: str = "Form submitted successfully"
    data: EligibilityResultData

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "success",
                "message": "Form submitted successfully",
                "data": {"lead_id": 1, "result": "congratulation", "listing": "congratulation"},
            }
        }
    )
