"""Tests for the Supabase query history adapter."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from enstream_proxy.adapters.supabase_query_repository import SupabaseQueryHistory
from enstream_proxy.domain.errors import ValidationError
from enstream_proxy.domain.queries import NewQuery


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    select_rows: list[dict[str, object]] = field(default_factory=list)
    inserted: list[object] = field(default_factory=list)
    filters: list[tuple[str, str, object]] = field(default_factory=list)
    ordering: list[tuple[str, bool]] = field(default_factory=list)
    limits: list[int] = field(default_factory=list)
    deletes: int = 0

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.inserted.append(payload)
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self.deletes += 1
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.filters.append(("neq", column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.ordering.append((column, desc))
        return self

    def limit(self, count: int) -> "FakeTable":
        self.limits.append(count)
        return self

    def execute(self) -> FakeResponse:
        if getattr(self, "_action", "select") == "select":
            return FakeResponse(data=self.select_rows)
        return FakeResponse(data=[])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_append_inserts_row_with_generated_fields() -> None:
    client = FakeSupabaseClient()
    history = SupabaseQueryHistory(client)

    record = history.append(
        NewQuery(
            phone_number="+12040000065",
            service_provider_id="8349570948",
            request_id="req-1",
            consent_granted=True,
            response_code="0",
            account_status="ACTIVE",
        )
    )

    [row] = client.table("phone_queries").inserted
    assert row["id"] == record.id
    assert row["phone_number"] == "+12040000065"
    assert row["response_code"] == "0"
    assert row["timestamp"] == record.timestamp.isoformat()


def test_recent_maps_rows_newest_first() -> None:
    client = FakeSupabaseClient()
    table = client.table("phone_queries")
    table.select_rows = [
        {
            "id": "b",
            "phone_number": "+12040000002",
            "service_provider_id": "8349570948",
            "request_id": None,
            "consent_granted": None,
            "response_code": "1",
            "response_message": None,
            "account_status": "NOT_FOUND",
            "timestamp": "2024-05-01T10:00:01.000Z",
        },
        {
            "id": "a",
            "phone_number": "+12040000001",
            "service_provider_id": "8349570948",
            "request_id": "req-a",
            "consent_granted": False,
            "response_code": "0",
            "response_message": "Success",
            "account_status": "ACTIVE",
            "timestamp": "2024-05-01T10:00:00+00:00",
        },
    ]
    history = SupabaseQueryHistory(client)

    records = history.recent(2)

    assert table.ordering == [("timestamp", True)]
    assert table.limits == [2]
    assert [record.id for record in records] == ["b", "a"]
    assert records[0].consent_granted is True
    assert records[0].timestamp == datetime(2024, 5, 1, 10, 0, 1, tzinfo=UTC)
    assert records[1].consent_granted is False


def test_recent_zero_skips_query_and_negative_is_rejected() -> None:
    client = FakeSupabaseClient()
    history = SupabaseQueryHistory(client)

    assert history.recent(0) == []
    with pytest.raises(ValidationError):
        history.recent(-5)
    assert client.table("phone_queries").limits == []


def test_clear_deletes_all_rows() -> None:
    client = FakeSupabaseClient()
    history = SupabaseQueryHistory(client)

    history.clear()

    table = client.table("phone_queries")
    assert table.deletes == 1
    assert table.filters == [("neq", "id", "")]
