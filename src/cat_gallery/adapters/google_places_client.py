"""Google Maps Places API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_ACCEPTED_STATUSES = {"OK", "ZERO_RESULTS"}


class PlacesApiError(RuntimeError):
    """Raised when the Places API rejects a request."""


class PlacesClient(Protocol):
    """Interface for Places API interactions."""

    async def get_place_photos(self, place_id: str) -> list[dict[str, object]]:
        """Return the raw photo entries of a place."""

    async def text_search(self, query: str) -> list[dict[str, object]]:
        """Return raw place results for a free-text query."""

    async def fetch_photo(self, photo_reference: str, max_width: int) -> bytes:
        """Download the image bytes behind a photo reference."""


@dataclass
class HttpxPlacesClient(PlacesClient):
    """HTTPX-backed Places client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 20.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout: float = 20.0
    ) -> "HttpxPlacesClient":
        """Create a Places client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(follow_redirects=True),
            timeout=timeout,
        )

    async def get_place_photos(self, place_id: str) -> list[dict[str, object]]:
        """Fetch place details restricted to the photo field."""
        payload = await self._get_json(
            "details/json", {"place_id": place_id, "fields": "photo"}
        )
        result = payload.get("result") or {}
        return list(result.get("photos") or [])

    async def text_search(self, query: str) -> list[dict[str, object]]:
        """Search places by free text."""
        payload = await self._get_json("textsearch/json", {"query": query})
        return list(payload.get("results") or [])

    async def fetch_photo(self, photo_reference: str, max_width: int) -> bytes:
        """Download a place photo, following the redirect to the image host."""
        response = await self.http_client.get(
            f"{self.base_url}/photo",
            params={
                "photoreference": photo_reference,
                "maxwidth": max_width,
                "key": self.api_key,
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.content

    async def _get_json(
        self, path: str, params: dict[str, object]
    ) -> dict[str, object]:
        response = await self.http_client.get(
            f"{self.base_url}/{path}",
            params={**params, "key": self.api_key},
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        status = payload.get("status", "OK")
        if status not in _ACCEPTED_STATUSES:
            message = payload.get("error_message") or "no error message"
            raise PlacesApiError(f"Places API returned {status}: {message}")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
