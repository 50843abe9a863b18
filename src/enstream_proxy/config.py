"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from enstream_proxy.domain.errors import ConfigurationError
from enstream_proxy.domain.queries import Credentials

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_USERNAME = "10096"
DEFAULT_SERVICE_PROVIDER_ID = "8349570948"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    enstream_qa_user: str | None = None
    enstream_username: str | None = None
    enstream_qa_pass: str | None = None
    enstream_password: str | None = None
    enstream_base_url: str = "https://api.enstream.com"
    enstream_timeout_seconds: float = 15.0
    default_service_provider_id: str = DEFAULT_SERVICE_PROVIDER_ID
    history_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_credentials(settings: Settings) -> Credentials:
    """Pick upstream credentials, QA values first.

    The username falls back to the shared QA account id; a missing password
    is a configuration error.
    """
    username = (
        _non_empty(settings.enstream_qa_user)
        or _non_empty(settings.enstream_username)
        or DEFAULT_USERNAME
    )
    password = _non_empty(settings.enstream_qa_pass) or _non_empty(
        settings.enstream_password
    )
    if password is None:
        raise ConfigurationError()
    return Credentials(username=username, password=password)


def _non_empty(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
