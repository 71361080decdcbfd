"""Shared field validators for inbound submission DTOs."""

import json
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.domain.errors import ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)


def require_non_empty(value: str) -> str:
    """Reject blank strings."""
    if not value or not value.strip():
        raise ValueError("must not be empty")
    return value


def validate_url(value: str) -> str:
    """Require an absolute URL; returns the submitted text, not the normalized URL."""
    try:
        _URL_ADAPTER.validate_python(value.strip())
    except PydanticValidationError as err:
        raise ValueError("must be a valid URL") from err
    return value.strip()


def validate_email_address(value: str) -> str:
    """Validate email syntax without a deliverability lookup."""
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError as err:
        raise ValueError("must be a valid email address") from err
    return value


def to_validation_error(err: PydanticValidationError) -> ValidationError:
    """
    Convert a pydantic validation error into per-field messages.

    Args:
        err: Error raised by model validation

    Returns:
        Domain ValidationError keyed by top-level field name
    """
    errors: dict[str, list[str]] = {}
    for item in err.errors():
        loc = item.get("loc") or ("__root__",)
        field = str(loc[0])
        message = item.get("msg", "invalid")
        if item.get("type") == "missing":
            message = f"The {field.replace('_', ' ')} field is required."
        errors.setdefault(field, []).append(message)
    return ValidationError(errors)


def stringify(value: Any) -> str:
    """Render a form value the way it is stored; nested objects become JSON."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value)
    return str(value)
