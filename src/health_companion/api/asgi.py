"""ASGI entrypoint for the health companion API."""

from health_companion.api.app import create_app
from health_companion.containers import build_container

app = create_app(build_container())
