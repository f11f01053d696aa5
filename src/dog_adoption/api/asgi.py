"""ASGI entrypoint for the dog adoption API."""

from dog_adoption.api.app import create_app
from dog_adoption.containers import build_container

app = create_app(build_container())
