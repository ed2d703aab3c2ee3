"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from cat_gallery.adapters.google_places_client import HttpxPlacesClient
from cat_gallery.adapters.google_vision_client import GoogleVisionClient
from cat_gallery.config import Settings
from cat_gallery.services.decision import build_policy
from cat_gallery.services.detection import CatDetector
from cat_gallery.services.gallery import GalleryService
from cat_gallery.services.locator import PhotoLocator
from cat_gallery.services.photos import PhotoFetcher
from cat_gallery.services.pipeline import CatExtractionPipeline
from cat_gallery.services.storage import LocalImageStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    pipeline: CatExtractionPipeline
    gallery_service: GalleryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    places_client = HttpxPlacesClient.create(
        api_key=resolved_settings.google_maps_api_key,
        base_url=resolved_settings.places_base_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    vision_client = GoogleVisionClient.create(resolved_settings.google_vision_api_key)
    store = LocalImageStore(root=Path(resolved_settings.storage_dir))
    pipeline = CatExtractionPipeline(
        locator=PhotoLocator(
            client=places_client,
            max_search_attempts=resolved_settings.max_search_attempts,
        ),
        fetcher=PhotoFetcher(
            client=places_client, max_width=resolved_settings.photo_max_width
        ),
        detector=CatDetector(
            client=vision_client, max_results=resolved_settings.vision_max_results
        ),
        policy=build_policy(
            resolved_settings.output_mode,
            min_detection_size=resolved_settings.min_detection_size,
            jpeg_quality=resolved_settings.jpeg_quality,
        ),
        store=store,
    )

    async def close_resources() -> None:
        await places_client.close()
        await vision_client.close()

    return AppContainer(
        settings=resolved_settings,
        pipeline=pipeline,
        gallery_service=GalleryService(store),
        close_resources=close_resources,
    )
