"""Validation of inbound account status requests."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from enstream_proxy.domain.errors import ValidationError
from enstream_proxy.domain.queries import AccountStatusRequest

E164_PATTERN = re.compile(r"\+[1-9][0-9]{1,14}")

INVALID_PHONE_MESSAGE = (
    "Invalid phone number format. Please use E.164 format (e.g., +1234567890)."
)


class AccountStatusPayload(BaseModel):
    """Inbound body of an account status check."""

    model_config = ConfigDict(strict=True, extra="ignore")

    phone_number: str = Field(alias="phoneNumber")
    service_provider_id: str = Field(alias="serviceProviderId")
    request_id: str | None = Field(default=None, alias="requestId")
    consent_granted: bool = Field(default=True, alias="consentGranted")

    @field_validator("phone_number")
    @classmethod
    def _check_e164(cls, value: str) -> str:
        if not E164_PATTERN.fullmatch(value):
            raise ValueError(INVALID_PHONE_MESSAGE)
        return value

    @field_validator("service_provider_id")
    @classmethod
    def _check_provider(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Service Provider ID is required")
        return value


def validate_account_status_request(
    payload: object, default_service_provider_id: str
) -> AccountStatusRequest:
    """Validate a raw JSON body and return a typed request.

    Raises ``ValidationError`` describing the first violated constraint.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object.")
    data = dict(payload)
    if data.get("serviceProviderId") is None:
        data["serviceProviderId"] = default_service_provider_id
    if data.get("requestId") == "":
        data["requestId"] = None
    try:
        parsed = AccountStatusPayload.model_validate(data)
    except PydanticValidationError as exc:
        raise first_validation_error(exc.errors()) from exc
    return AccountStatusRequest(
        phone_number=parsed.phone_number,
        service_provider_id=parsed.service_provider_id,
        request_id=parsed.request_id,
        consent_granted=parsed.consent_granted,
    )


def first_validation_error(errors: Sequence[Mapping[str, Any]]) -> ValidationError:
    """Translate pydantic-style error dicts into a single ``ValidationError``."""
    if not errors:
        return ValidationError()
    error = errors[0]
    field = _field_name(error.get("loc", ()))
    if error.get("type") == "value_error":
        context = error.get("ctx") or {}
        return ValidationError(str(context.get("error", error.get("msg"))), field)
    message = str(error.get("msg", "Invalid value"))
    if field:
        message = f"{field}: {message}"
    return ValidationError(message, field)


def _field_name(loc: Sequence[object]) -> str | None:
    names = [part for part in loc if isinstance(part, str)]
    if not names:
        return None
    return names[-1]
