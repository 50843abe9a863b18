"""EnStream account status API client."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

import httpx

from enstream_proxy.domain.errors import UpstreamUnavailable
from enstream_proxy.domain.queries import (
    NOT_FOUND_STATUS,
    AccountStatusRequest,
    AccountStatusResult,
    Credentials,
)

ACCOUNT_STATUS_PATH = "/api/rest/service/v1/accountStatus"

_KNOWN_FIELDS = {"responseCode", "responseMessage", "accountStatus"}
_CODE_PATTERN = re.compile(r"-?[0-9]+")

_logger = logging.getLogger(__name__)


class EnStreamClient(Protocol):
    """Interface for EnStream account status lookups."""

    async def get_account_status(
        self,
        request: AccountStatusRequest,
        credentials: Credentials,
        request_id: str,
    ) -> AccountStatusResult:
        """Look up the account status for a phone number."""


@dataclass
class HttpxEnStreamClient(EnStreamClient):
    """HTTPX-backed EnStream client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float) -> "HttpxEnStreamClient":
        """Create an EnStream client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def get_account_status(
        self,
        request: AccountStatusRequest,
        credentials: Credentials,
        request_id: str,
    ) -> AccountStatusResult:
        """Issue a single accountStatus call; failures are not retried."""
        url = f"{self.base_url}{ACCOUNT_STATUS_PATH}"
        try:
            response = await self.http_client.post(
                url,
                auth=httpx.BasicAuth(credentials.username, credentials.password),
                json={
                    "msisdn": request.phone_number,
                    "serviceProviderId": request.service_provider_id,
                    "consentGranted": request.consent_granted,
                    "requestId": request_id,
                },
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            _logger.warning(
                "EnStream returned HTTP %s for request %s",
                exc.response.status_code,
                request_id,
            )
            raise UpstreamUnavailable() from exc
        except httpx.HTTPError as exc:
            _logger.warning("EnStream call failed for request %s: %r", request_id, exc)
            raise UpstreamUnavailable() from exc
        except ValueError as exc:
            _logger.warning(
                "EnStream returned a non-JSON body for request %s", request_id
            )
            raise UpstreamUnavailable() from exc
        return parse_account_status(payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def parse_account_status(payload: object) -> AccountStatusResult:
    """Normalize an upstream accountStatus body.

    Raises ``UpstreamUnavailable`` when the body is not usable.
    """
    if not isinstance(payload, dict):
        raise UpstreamUnavailable()
    response_code = _coerce_code(payload.get("responseCode"))
    if response_code is None:
        raise UpstreamUnavailable()
    message = payload.get("responseMessage")
    status = payload.get("accountStatus")
    if status is None and response_code == 1:
        status = NOT_FOUND_STATUS
    return AccountStatusResult(
        response_code=response_code,
        response_message=None if message is None else str(message),
        account_status=None if status is None else str(status),
        attributes={
            key: value for key, value in payload.items() if key not in _KNOWN_FIELDS
        },
    )


def _coerce_code(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _CODE_PATTERN.fullmatch(value.strip()):
        return int(value.strip())
    return None
