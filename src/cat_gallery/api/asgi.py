"""ASGI entrypoint for the cat gallery."""

from cat_gallery.api.app import create_app
from cat_gallery.containers import build_container

app = create_app(build_container())
