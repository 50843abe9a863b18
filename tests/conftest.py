"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from enstream_proxy.adapters.enstream_client import EnStreamClient
from enstream_proxy.config import Settings
from enstream_proxy.containers import AppContainer
from enstream_proxy.domain.queries import (
    AccountStatusRequest,
    AccountStatusResult,
    Credentials,
)
from enstream_proxy.services.account_status import AccountStatusService
from enstream_proxy.services.history import InMemoryQueryHistory


@dataclass
class FakeEnStreamClient(EnStreamClient):
    """Fake EnStream client returning a configurable result."""

    result: AccountStatusResult = field(
        default_factory=lambda: AccountStatusResult(
            response_code=0,
            response_message="Success",
            account_status="ACTIVE",
        )
    )
    error: Exception | None = None
    calls: list[tuple[AccountStatusRequest, Credentials, str]] = field(
        default_factory=list
    )

    async def get_account_status(
        self,
        request: AccountStatusRequest,
        credentials: Credentials,
        request_id: str,
    ) -> AccountStatusResult:
        self.calls.append((request, credentials, request_id))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings() -> Settings:
    return Settings(
        enstream_qa_user="qa-user",
        enstream_username=None,
        enstream_qa_pass="qa-pass",
        enstream_password=None,
        enstream_base_url="https://enstream.test",
        history_backend="memory",
        supabase_url=None,
        supabase_service_key=None,
    )


@pytest.fixture
def enstream_client() -> FakeEnStreamClient:
    return FakeEnStreamClient()


@pytest.fixture
def query_history() -> InMemoryQueryHistory:
    return InMemoryQueryHistory()


@pytest.fixture
def container(
    settings: Settings,
    enstream_client: FakeEnStreamClient,
    query_history: InMemoryQueryHistory,
) -> AppContainer:
    account_status_service = AccountStatusService(
        settings=settings,
        client=enstream_client,
        history=query_history,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        enstream_client=enstream_client,
        query_history=query_history,
        account_status_service=account_status_service,
        close_resources=close_resources,
    )
