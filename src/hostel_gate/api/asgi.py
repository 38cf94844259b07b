"""ASGI entrypoint for the hostel gate API."""

from hostel_gate.api.app import create_app
from hostel_gate.containers import build_container

app = create_app(build_container())
