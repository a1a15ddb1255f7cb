"""ASGI entrypoint for the Squadz API."""

from squadz.api.app import create_app
from squadz.containers import build_container

app = create_app(build_container())
