"""Domain models for account status lookups and query history."""

from dataclasses import dataclass, field
from datetime import datetime

NOT_FOUND_STATUS = "NOT_FOUND"


@dataclass(frozen=True)
class Credentials:
    """Basic Auth credentials for the upstream API."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class AccountStatusRequest:
    """A validated account status request."""

    phone_number: str
    service_provider_id: str
    request_id: str | None = None
    consent_granted: bool = True


@dataclass(frozen=True)
class AccountStatusResult:
    """Normalized upstream answer for a single MSISDN."""

    response_code: int
    response_message: str | None = None
    account_status: str | None = None
    attributes: dict[str, object] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.response_code == 0


@dataclass(frozen=True)
class AccountStatusOutcome:
    """Result echoed back to the caller with request context."""

    result: AccountStatusResult
    phone_number: str
    request_id: str
    timestamp: datetime


@dataclass(frozen=True)
class NewQuery:
    """Caller-supplied fields of a history record."""

    phone_number: str
    service_provider_id: str
    request_id: str | None
    consent_granted: bool
    response_code: str
    response_message: str | None = None
    account_status: str | None = None


@dataclass(frozen=True)
class QueryRecord:
    """A stored history entry."""

    id: str
    phone_number: str
    service_provider_id: str
    request_id: str | None
    consent_granted: bool
    response_code: str
    response_message: str | None
    account_status: str | None
    timestamp: datetime
