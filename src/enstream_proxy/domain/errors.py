"""Error taxonomy for the account status proxy."""


class ProxyError(Exception):
    """Base error carrying an HTTP status and a client-safe message."""

    status_code = 500
    public_message = "An unexpected error occurred while checking account status."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(ProxyError):
    """Inbound request does not match the expected shape."""

    status_code = 400
    public_message = "Invalid request."

    def __init__(self, message: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConfigurationError(ProxyError):
    """Required configuration, such as upstream credentials, is missing."""

    status_code = 500
    public_message = (
        "EnStream credentials not configured. Please set ENSTREAM_QA_PASS "
        "or ENSTREAM_PASSWORD environment variable."
    )


class UpstreamUnavailable(ProxyError):
    """The upstream call could not complete."""

    status_code = 502
    public_message = "EnStream API is currently unavailable. Please try again later."


class InternalError(ProxyError):
    """Unclassified failure."""
