"""Account status and query history endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from enstream_proxy.domain.errors import ValidationError
from enstream_proxy.services.history import DEFAULT_RECENT_LIMIT
from enstream_proxy.services.validation import validate_account_status_request

if TYPE_CHECKING:
    from enstream_proxy.containers import AppContainer
    from enstream_proxy.domain.queries import AccountStatusOutcome, QueryRecord

router = APIRouter(prefix="/api", tags=["account-status"])


@router.post("/account-status")
async def check_account_status(request: Request) -> dict[str, object]:
    """Validate the body, query EnStream, and echo the normalized result."""
    container: AppContainer = request.app.state.container
    try:
        payload = await request.json()
    except ValueError as exc:
        raise ValidationError("Request body must be valid JSON.") from exc
    validated = validate_account_status_request(
        payload, container.settings.default_service_provider_id
    )
    outcome = await container.account_status_service.check(validated)
    return _format_outcome(outcome)


@router.get("/recent-queries")
async def recent_queries(
    request: Request, limit: int = DEFAULT_RECENT_LIMIT
) -> list[dict[str, object]]:
    """Return recent queries, newest first."""
    container: AppContainer = request.app.state.container
    records = container.query_history.recent(limit)
    return [_format_record(record) for record in records]


@router.delete("/recent-queries")
async def clear_recent_queries(request: Request) -> dict[str, str]:
    """Remove all stored queries."""
    container: AppContainer = request.app.state.container
    container.query_history.clear()
    return {"message": "Query history cleared successfully"}


def _format_outcome(outcome: AccountStatusOutcome) -> dict[str, object]:
    result = outcome.result
    body: dict[str, object] = {"responseCode": result.response_code}
    if result.response_message is not None:
        body["responseMessage"] = result.response_message
    if result.account_status is not None:
        body["accountStatus"] = result.account_status
    body.update(result.attributes)
    body["phoneNumber"] = outcome.phone_number
    body["requestId"] = outcome.request_id
    body["timestamp"] = _isoformat(outcome.timestamp)
    return body


def _format_record(record: QueryRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "phoneNumber": record.phone_number,
        "serviceProviderId": record.service_provider_id,
        "requestId": record.request_id,
        "consentGranted": record.consent_granted,
        "responseCode": record.response_code,
        "responseMessage": record.response_message,
        "accountStatus": record.account_status,
        "timestamp": _isoformat(record.timestamp),
    }


def _isoformat(value: datetime) -> str:
    return (
        value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )
