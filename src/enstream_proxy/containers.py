"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from enstream_proxy.adapters.enstream_client import EnStreamClient, HttpxEnStreamClient
from enstream_proxy.adapters.supabase_query_repository import SupabaseQueryHistory
from enstream_proxy.config import Settings
from enstream_proxy.domain.errors import ConfigurationError
from enstream_proxy.services.account_status import AccountStatusService
from enstream_proxy.services.history import InMemoryQueryHistory, QueryHistory


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    enstream_client: EnStreamClient
    query_history: QueryHistory
    account_status_service: AccountStatusService
    close_resources: Callable[[], Awaitable[None]]


def build_query_history(settings: Settings) -> QueryHistory:
    """Create the configured history store."""
    if settings.history_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ConfigurationError(
                "HISTORY_BACKEND=supabase requires SUPABASE_URL and "
                "SUPABASE_SERVICE_KEY."
            )
        return SupabaseQueryHistory(
            create_client(settings.supabase_url, settings.supabase_service_key)
        )
    return InMemoryQueryHistory()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    enstream_client = HttpxEnStreamClient.create(
        base_url=resolved_settings.enstream_base_url,
        timeout_seconds=resolved_settings.enstream_timeout_seconds,
    )
    query_history = build_query_history(resolved_settings)
    account_status_service = AccountStatusService(
        settings=resolved_settings,
        client=enstream_client,
        history=query_history,
    )

    async def close_resources() -> None:
        await enstream_client.close()

    return AppContainer(
        settings=resolved_settings,
        enstream_client=enstream_client,
        query_history=query_history,
        account_status_service=account_status_service,
        close_resources=close_resources,
    )
