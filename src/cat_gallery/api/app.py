"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from html import escape
from pathlib import Path
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from cat_gallery.app_logging import configure_logging
from cat_gallery.containers import AppContainer
from cat_gallery.domain.places import PlaceQuery
from cat_gallery.services.gallery import GalleryEntry
from cat_gallery.services.locator import NoPhotosFoundError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    storage_dir = Path(container.settings.storage_dir)
    storage_dir.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.mount("/storage", StaticFiles(directory=storage_dir), name="storage")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def gallery(request: Request, message: str | None = None) -> HTMLResponse:
        """Render saved cat photos, newest first."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.gallery_service.list_entries()
        return HTMLResponse(_render_gallery(entries, message))

    @app.get("/extract-cats")
    async def extract_cats(request: Request) -> RedirectResponse:
        """Run one random extraction and return to the gallery."""
        state_container: AppContainer = request.app.state.container
        try:
            summary = await state_container.pipeline.run(
                PlaceQuery.random(),
                limit=state_container.settings.gallery_extract_limit,
            )
        except NoPhotosFoundError:
            logger.warning("Extraction found no photos", exc_info=True)
            message = "No photos found. Please try again."
        else:
            message = (
                f"Cat photo search finished: {summary.saved} new photo(s) saved."
            )
        return RedirectResponse(
            url=f"/?{urlencode({'message': message})}", status_code=303
        )

    return app


def _render_gallery(entries: list[GalleryEntry], message: str | None) -> str:
    """Build the gallery page markup."""
    if message:
        flash = f'<div class="flash" role="alert">{escape(message)}</div>'
    else:
        flash = ""
    if entries:
        cards = "\n".join(
            _CARD_HTML.format(
                url=escape(entry.url),
                place_id=escape(entry.place_id),
                created_at=escape(entry.created_at),
            )
            for entry in entries
        )
        body = f'<div class="gallery">\n{cards}\n</div>'
    else:
        body = (
            '<p class="empty">No cat photos yet. '
            "Click &quot;Find new cat photos&quot; to collect some.</p>"
        )
    return _GALLERY_HTML.format(flash=flash, count=len(entries), body=body)


_CARD_HTML = """      <div class="cat-card">
        <img src="{url}" alt="Cat image" class="cat-image" />
        <div class="meta">
          <p>Place ID: {place_id}</p>
          <p>Saved at: {created_at}</p>
        </div>
      </div>"""

_GALLERY_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Cat Photo Gallery</title>
    <style>
      body {{ font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem;
        background: #f3f4f6; }}
      header {{ text-align: center; margin-bottom: 2rem; }}
      .flash {{ background: #dcfce7; border: 1px solid #4ade80; padding: 0.75rem;
        margin-bottom: 1.5rem; border-radius: 6px; }}
      .panel {{ background: #fff; padding: 1.5rem; border-radius: 8px;
        margin-bottom: 2rem; }}
      .button {{ background: #3b82f6; color: #fff; padding: 0.5rem 1rem;
        border-radius: 6px; text-decoration: none; }}
      .gallery {{ display: grid; gap: 16px;
        grid-template-columns: repeat(auto-fill, minmax(250px, 1fr)); }}
      .cat-card {{ background: #fff; border-radius: 10px; overflow: hidden;
        box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1); }}
      .cat-image {{ width: 100%; height: 200px; object-fit: cover; }}
      .meta {{ padding: 1rem; color: #6b7280; font-size: 0.875rem; }}
      .empty {{ text-align: center; padding: 3rem; color: #4b5563; }}
    </style>
  </head>
  <body>
    <header>
      <h1>Cats on Google Maps</h1>
      <p>Cat photos found on Google Maps places</p>
    </header>
    {flash}
    <div class="panel">
      <p><strong>Total photos:</strong> {count}</p>
      <p><a class="button" href="/extract-cats">Find new cat photos</a></p>
    </div>
    {body}
  </body>
</html>
"""
