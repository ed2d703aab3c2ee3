"""Place photo lookup, including random cat-place search."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field

import httpx

from cat_gallery.adapters.google_places_client import PlacesApiError, PlacesClient
from cat_gallery.domain.places import LocatedPhotos, PhotoReference, PlaceQuery

CAT_KEYWORDS: tuple[str, ...] = (
    "cat cafe",
    "cat park",
    "cat shelter",
    "cat sanctuary",
    "cat rescue",
    "pet store",
    "animal shelter",
    "veterinary clinic",
    "cat statue",
    "cat museum",
)

WORLD_CITIES: tuple[str, ...] = (
    "Tokyo",
    "New York",
    "London",
    "Paris",
    "Sydney",
    "Berlin",
    "Rome",
    "Madrid",
    "Bangkok",
    "Singapore",
    "Istanbul",
    "Cairo",
    "Rio de Janeiro",
    "Mexico City",
    "Cape Town",
    "Moscow",
    "Seoul",
    "Beijing",
    "Toronto",
)

_logger = logging.getLogger(__name__)


class NoPhotosFoundError(RuntimeError):
    """Raised when no photo references can be located for a run."""


class SearchExhaustedError(NoPhotosFoundError):
    """Raised when random search runs out of attempts."""


@dataclass
class PhotoLocator:
    """Resolve a place query into a place id and its photo references."""

    client: PlacesClient
    rng: random.Random = field(default_factory=random.Random)
    keywords: Sequence[str] = CAT_KEYWORDS
    cities: Sequence[str] = WORLD_CITIES
    max_search_attempts: int = 10

    async def locate(self, query: PlaceQuery) -> LocatedPhotos:
        """Return the resolved place id with its photos (possibly empty).

        Places API and transport failures are raised as NoPhotosFoundError.
        """
        try:
            if query.is_random:
                return await self._locate_random()
            photos = await self._photos_for(query.place_id)
        except (PlacesApiError, httpx.HTTPError) as exc:
            raise NoPhotosFoundError(f"Place lookup failed: {exc}") from exc
        return LocatedPhotos(place_id=query.place_id, photos=photos)

    async def _locate_random(self) -> LocatedPhotos:
        for attempt in range(1, self.max_search_attempts + 1):
            keyword = self.rng.choice(self.keywords)
            city = self.rng.choice(self.cities)
            _logger.info(
                "Searching for '%s' in %s (attempt %s/%s)",
                keyword,
                city,
                attempt,
                self.max_search_attempts,
            )
            results = await self.client.text_search(f"{keyword} in {city}")
            if not results:
                _logger.warning(
                    "No places found for '%s' in %s, trying another search",
                    keyword,
                    city,
                )
                continue

            place = self.rng.choice(results)
            place_id = place.get("place_id")
            if not place_id:
                _logger.warning("Selected place has no place_id, trying another search")
                continue
            place_name = str(place.get("name") or "Unknown place")
            _logger.info("Selected place: %s (ID: %s)", place_name, place_id)

            photos = await self._photos_for(str(place_id))
            if not photos:
                _logger.warning("No photos at %s, trying another place", place_name)
                continue
            return LocatedPhotos(
                place_id=str(place_id), photos=photos, place_name=place_name
            )

        raise SearchExhaustedError(
            f"Random place search found no photos after "
            f"{self.max_search_attempts} attempts"
        )

    async def _photos_for(self, place_id: str) -> tuple[PhotoReference, ...]:
        entries = await self.client.get_place_photos(place_id)
        photos: list[PhotoReference] = []
        for entry in entries:
            reference = entry.get("photo_reference")
            if not reference:
                _logger.warning("Photo reference missing for %s, skipping", place_id)
                continue
            width = entry.get("width")
            photos.append(
                PhotoReference(
                    reference=str(reference),
                    max_width=width if isinstance(width, int) else None,
                )
            )
        return tuple(photos)
