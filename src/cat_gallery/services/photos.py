"""Photo download service."""

from dataclasses import dataclass
from typing import Protocol

from cat_gallery.domain.places import PhotoReference


class PhotoClient(Protocol):
    """Interface for resolving photo references to bytes."""

    async def fetch_photo(self, photo_reference: str, max_width: int) -> bytes:
        """Download the image bytes behind a photo reference."""


@dataclass
class PhotoFetcher:
    """Fetch raw image bytes for a photo reference."""

    client: PhotoClient
    max_width: int = 1600

    async def fetch(self, ref: PhotoReference) -> bytes:
        """Download one photo no wider than the configured maximum."""
        width = self.max_width
        if ref.max_width:
            width = min(width, ref.max_width)
        return await self.client.fetch_photo(ref.reference, max_width=width)
