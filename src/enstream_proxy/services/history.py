"""Query history stores."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from enstream_proxy.domain.errors import ValidationError
from enstream_proxy.domain.queries import NewQuery, QueryRecord

DEFAULT_RECENT_LIMIT = 10


class QueryHistory(Protocol):
    """Ordered store of past account status queries."""

    def append(self, query: NewQuery) -> QueryRecord:
        """Store a query with a fresh id and creation timestamp."""

    def recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[QueryRecord]:
        """Return up to ``limit`` records, newest first."""

    def clear(self) -> None:
        """Remove every stored record."""


@dataclass
class InMemoryQueryHistory(QueryHistory):
    """Process-local history kept in insertion order.

    Relies on the single event loop for consistency; not shared across
    worker processes.
    """

    _records: list[QueryRecord] = field(default_factory=list)

    def append(self, query: NewQuery) -> QueryRecord:
        """Store a query and return the created record."""
        record = build_record(query)
        self._records.append(record)
        return record

    def recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[QueryRecord]:
        """Return the newest ``limit`` records."""
        check_limit(limit)
        if limit == 0:
            return []
        return list(reversed(self._records[-limit:]))

    def clear(self) -> None:
        """Drop all records."""
        self._records.clear()


def build_record(query: NewQuery) -> QueryRecord:
    """Attach an identifier and creation timestamp to a new query."""
    return QueryRecord(
        id=str(uuid4()),
        phone_number=query.phone_number,
        service_provider_id=query.service_provider_id,
        request_id=query.request_id,
        consent_granted=query.consent_granted,
        response_code=query.response_code,
        response_message=query.response_message,
        account_status=query.account_status,
        timestamp=datetime.now(tz=UTC),
    )


def check_limit(limit: int) -> None:
    """Reject negative history limits."""
    if limit < 0:
        raise ValidationError("limit must be greater than or equal to 0", "limit")
