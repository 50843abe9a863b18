"""ASGI entrypoint for the account status proxy."""

from enstream_proxy.api.app import create_app
from enstream_proxy.containers import build_container

app = create_app(build_container())
