"""Object localization service used to find cats."""

import logging
from dataclasses import dataclass
from typing import Protocol

from cat_gallery.domain.detection import BoundingPolygon, DetectedObject

_logger = logging.getLogger(__name__)


class ObjectLocalizationClient(Protocol):
    """Interface for an object localization backend."""

    async def localize_objects(
        self, image_bytes: bytes, max_results: int
    ) -> list[dict[str, object]]:
        """Return raw objects as `name`, `score` and normalized `vertices`."""


@dataclass
class CatDetector:
    """Detect labelled objects in an image, degrading to no detections on error."""

    client: ObjectLocalizationClient
    max_results: int = 50

    async def detect(self, image_bytes: bytes) -> list[DetectedObject]:
        """Return localized objects for one image."""
        try:
            raw_objects = await self.client.localize_objects(
                image_bytes, max_results=self.max_results
            )
        except Exception:
            _logger.warning("Object localization failed", exc_info=True)
            return []
        return [_to_detected_object(raw) for raw in raw_objects]


def _to_detected_object(raw: dict[str, object]) -> DetectedObject:
    """Convert a raw localization entry into a domain object."""
    vertices = raw.get("vertices") or []
    points = [(float(x), float(y)) for x, y in vertices]
    return DetectedObject(
        label=str(raw.get("name", "")),
        score=float(raw.get("score") or 0.0),
        polygon=BoundingPolygon.from_points(points),
    )
