"""Account status lookups with query history."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from enstream_proxy.adapters.enstream_client import EnStreamClient
from enstream_proxy.app_logging import mask_phone_number
from enstream_proxy.config import Settings, resolve_credentials
from enstream_proxy.domain.queries import (
    AccountStatusOutcome,
    AccountStatusRequest,
    NewQuery,
)
from enstream_proxy.services.history import QueryHistory

_logger = logging.getLogger(__name__)


@dataclass
class AccountStatusService:
    """Checks account status upstream and records each answered query."""

    settings: Settings
    client: EnStreamClient
    history: QueryHistory

    async def check(self, request: AccountStatusRequest) -> AccountStatusOutcome:
        """Run one status check for a validated request."""
        credentials = resolve_credentials(self.settings)
        request_id = request.request_id or str(uuid4())
        result = await self.client.get_account_status(
            request, credentials, request_id
        )
        self.history.append(
            NewQuery(
                phone_number=request.phone_number,
                service_provider_id=request.service_provider_id,
                request_id=request_id,
                consent_granted=request.consent_granted,
                response_code=str(result.response_code),
                response_message=result.response_message,
                account_status=result.account_status,
            )
        )
        _logger.info(
            "Account status %s: msisdn=%s provider=%s code=%s found=%s",
            request_id,
            mask_phone_number(request.phone_number),
            request.service_provider_id,
            result.response_code,
            result.found,
        )
        return AccountStatusOutcome(
            result=result,
            phone_number=request.phone_number,
            request_id=request_id,
            timestamp=datetime.now(tz=UTC),
        )
