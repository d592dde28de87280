"""ASGI entrypoint for the catalog studio API."""

from catalog_studio.api.app import create_app
from catalog_studio.containers import build_container

app = create_app(build_container())
