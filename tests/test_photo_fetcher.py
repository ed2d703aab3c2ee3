"""Tests for the photo fetcher."""

import asyncio

from cat_gallery.domain.places import PhotoReference
from cat_gallery.services.photos import PhotoFetcher
from tests.conftest import FakePlacesClient


def test_fetch_caps_width_at_default_maximum() -> None:
    client = FakePlacesClient(photo_bytes=b"jpeg")
    fetcher = PhotoFetcher(client=client)

    data = asyncio.run(fetcher.fetch(PhotoReference("ref-1", max_width=4032)))

    assert data == b"jpeg"
    assert client.fetched == [("ref-1", 1600)]


def test_fetch_uses_smaller_width_hint() -> None:
    client = FakePlacesClient()
    fetcher = PhotoFetcher(client=client, max_width=1600)

    asyncio.run(fetcher.fetch(PhotoReference("ref-1", max_width=640)))
    asyncio.run(fetcher.fetch(PhotoReference("ref-2")))

    assert client.fetched == [("ref-1", 640), ("ref-2", 1600)]
