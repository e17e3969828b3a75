"""ASGI entrypoint for the compost logbook API."""

from compost_logbook.api.app import create_app
from compost_logbook.containers import build_container

app = create_app(build_container())
