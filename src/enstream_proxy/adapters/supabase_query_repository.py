"""Supabase-backed query history."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from enstream_proxy.domain.queries import NewQuery, QueryRecord
from enstream_proxy.services.history import (
    DEFAULT_RECENT_LIMIT,
    QueryHistory,
    build_record,
    check_limit,
)

_TABLE = "phone_queries"
_COLUMNS = (
    "id, phone_number, service_provider_id, request_id, consent_granted, "
    "response_code, response_message, account_status, timestamp"
)


@dataclass
class SupabaseQueryHistory(QueryHistory):
    """Query history stored in the ``phone_queries`` table."""

    client: Client

    def append(self, query: NewQuery) -> QueryRecord:
        """Insert a query row and return the stored record."""
        record = build_record(query)
        self.client.table(_TABLE).insert(
            {
                "id": record.id,
                "phone_number": record.phone_number,
                "service_provider_id": record.service_provider_id,
                "request_id": record.request_id,
                "consent_granted": record.consent_granted,
                "response_code": record.response_code,
                "response_message": record.response_message,
                "account_status": record.account_status,
                "timestamp": record.timestamp.isoformat(),
            }
        ).execute()
        return record

    def recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[QueryRecord]:
        """Return the newest ``limit`` rows."""
        check_limit(limit)
        if limit == 0:
            return []
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [_row_to_record(row) for row in response.data or []]

    def clear(self) -> None:
        """Delete every row; PostgREST requires a filter on delete."""
        self.client.table(_TABLE).delete().neq("id", "").execute()


def _row_to_record(row: dict[str, object]) -> QueryRecord:
    consent = row.get("consent_granted")
    return QueryRecord(
        id=str(row["id"]),
        phone_number=str(row["phone_number"]),
        service_provider_id=str(row["service_provider_id"]),
        request_id=_optional_str(row.get("request_id")),
        consent_granted=True if consent is None else bool(consent),
        response_code=str(row.get("response_code") or ""),
        response_message=_optional_str(row.get("response_message")),
        account_status=_optional_str(row.get("account_status")),
        timestamp=_parse_timestamp(row["timestamp"]),
    )


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
