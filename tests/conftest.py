"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

import httpx
import pytest
from PIL import Image

from cat_gallery.adapters.google_places_client import PlacesClient
from cat_gallery.config import Settings
from cat_gallery.containers import AppContainer
from cat_gallery.services.decision import CropPolicy
from cat_gallery.services.detection import CatDetector, ObjectLocalizationClient
from cat_gallery.services.gallery import GalleryService
from cat_gallery.services.locator import PhotoLocator
from cat_gallery.services.photos import PhotoFetcher
from cat_gallery.services.pipeline import CatExtractionPipeline
from cat_gallery.services.storage import LocalImageStore


def make_jpeg(width: int = 200, height: int = 100, color: str = "orange") -> bytes:
    """Encode a solid-colour JPEG for tests."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="JPEG")
    return buffer.getvalue()


def photo_entry(reference: str, width: int = 4032) -> dict[str, object]:
    """Build a Places API photo entry."""
    return {"photo_reference": reference, "width": width, "height": 3024}


def cat_object(
    label: str = "Cat",
    box: tuple[float, float, float, float] = (0.1, 0.1, 0.6, 0.9),
) -> dict[str, object]:
    """Build a raw localized object with a rectangular polygon."""
    left, top, right, bottom = box
    return {
        "name": label,
        "score": 0.9,
        "vertices": [(left, top), (right, top), (right, bottom), (left, bottom)],
    }


@dataclass
class FakePlacesClient(PlacesClient):
    """Fake Places client with scripted responses."""

    details: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    search_responses: list[list[dict[str, object]]] = field(default_factory=list)
    photo_bytes: bytes = field(default_factory=make_jpeg)
    failing_references: set[str] = field(default_factory=set)
    search_error: Exception | None = None
    details_error: Exception | None = None
    searches: list[str] = field(default_factory=list)
    detail_requests: list[str] = field(default_factory=list)
    fetched: list[tuple[str, int]] = field(default_factory=list)

    async def get_place_photos(self, place_id: str) -> list[dict[str, object]]:
        self.detail_requests.append(place_id)
        if self.details_error is not None:
            raise self.details_error
        return self.details.get(place_id, [])

    async def text_search(self, query: str) -> list[dict[str, object]]:
        self.searches.append(query)
        if self.search_error is not None:
            raise self.search_error
        if not self.search_responses:
            return []
        return self.search_responses.pop(0)

    async def fetch_photo(self, photo_reference: str, max_width: int) -> bytes:
        self.fetched.append((photo_reference, max_width))
        if photo_reference in self.failing_references:
            raise httpx.ConnectError("connection refused")
        return self.photo_bytes


@dataclass
class FakeLocalizationClient(ObjectLocalizationClient):
    """Fake localization client returning queued responses per call."""

    responses: list[list[dict[str, object]]] = field(default_factory=list)
    error: Exception | None = None
    calls: list[int] = field(default_factory=list)

    async def localize_objects(
        self, image_bytes: bytes, max_results: int
    ) -> list[dict[str, object]]:
        self.calls.append(max_results)
        if self.error is not None:
            raise self.error
        if not self.responses:
            return []
        return self.responses.pop(0)


@dataclass
class FailingImageStore(LocalImageStore):
    """Image store whose writes always fail."""

    def save(self, data: bytes, place_id: str) -> str:
        raise OSError("disk full")


@dataclass
class FlakyImageStore(LocalImageStore):
    """Image store whose writes fail on selected calls."""

    failing_calls: set[int] = field(default_factory=set)
    calls: int = 0

    def save(self, data: bytes, place_id: str) -> str:
        self.calls += 1
        if self.calls in self.failing_calls:
            raise OSError("disk full")
        return super().save(data, place_id)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        google_maps_api_key="maps-key",
        google_vision_api_key="vision-key",
        storage_dir=str(tmp_path / "public"),
    )


@pytest.fixture
def places_client() -> FakePlacesClient:
    return FakePlacesClient()


@pytest.fixture
def localization_client() -> FakeLocalizationClient:
    return FakeLocalizationClient()


@pytest.fixture
def image_store(settings: Settings) -> LocalImageStore:
    return LocalImageStore(root=Path(settings.storage_dir))


@pytest.fixture
def pipeline(
    places_client: FakePlacesClient,
    localization_client: FakeLocalizationClient,
    image_store: LocalImageStore,
) -> CatExtractionPipeline:
    return CatExtractionPipeline(
        locator=PhotoLocator(client=places_client, rng=random.Random(7)),
        fetcher=PhotoFetcher(client=places_client),
        detector=CatDetector(client=localization_client),
        policy=CropPolicy(),
        store=image_store,
    )


@pytest.fixture
def container(
    settings: Settings,
    pipeline: CatExtractionPipeline,
    image_store: LocalImageStore,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        pipeline=pipeline,
        gallery_service=GalleryService(image_store),
        close_resources=close_resources,
    )
