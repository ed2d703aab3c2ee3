"""Cat extraction pipeline orchestration."""

import logging
from dataclasses import dataclass, field

from cat_gallery.domain.places import PhotoReference, PlaceQuery
from cat_gallery.services.decision import OutputPolicy
from cat_gallery.services.detection import CatDetector
from cat_gallery.services.locator import NoPhotosFoundError, PhotoLocator
from cat_gallery.services.photos import PhotoFetcher
from cat_gallery.services.storage import ImageStore

_logger = logging.getLogger(__name__)


@dataclass
class ExtractionSummary:
    """Outcome of one pipeline run."""

    place_id: str
    place_name: str | None = None
    processed: int = 0
    failed: int = 0
    saved_paths: list[str] = field(default_factory=list)

    @property
    def saved(self) -> int:
        return len(self.saved_paths)


@dataclass
class CatExtractionPipeline:
    """Locate photos for a place, find cats and store the results."""

    locator: PhotoLocator
    fetcher: PhotoFetcher
    detector: CatDetector
    policy: OutputPolicy
    store: ImageStore

    async def run(self, query: PlaceQuery, limit: int = 50) -> ExtractionSummary:
        """Process up to `limit` photos of the queried place.

        Raises NoPhotosFoundError when no photo references can be located.
        Failures while handling a single photo are logged and skipped.
        """
        located = await self.locator.locate(query)
        if not located.photos:
            raise NoPhotosFoundError(f"No photos found for place {located.place_id}")

        summary = ExtractionSummary(
            place_id=located.place_id, place_name=located.place_name
        )
        for photo in located.photos[: max(limit, 0)]:
            summary.processed += 1
            try:
                outputs = await self._select_outputs(photo)
            except Exception as exc:
                summary.failed += 1
                _logger.warning(
                    "Failed to process photo %s: %s", photo.reference[:16], exc
                )
                continue
            if not self._save_outputs(outputs, located.place_id, summary):
                summary.failed += 1

        _logger.info(
            "Finished place %s: processed=%s saved=%s failed=%s",
            summary.place_id,
            summary.processed,
            summary.saved,
            summary.failed,
        )
        return summary

    async def _select_outputs(self, photo: PhotoReference) -> list[bytes]:
        image_bytes = await self.fetcher.fetch(photo)
        objects = await self.detector.detect(image_bytes)
        return self.policy.select(image_bytes, objects)

    def _save_outputs(
        self, outputs: list[bytes], place_id: str, summary: ExtractionSummary
    ) -> bool:
        """Save each output on its own; return False if any save failed."""
        all_saved = True
        for output in outputs:
            try:
                path = self.store.save(output, place_id)
            except Exception as exc:
                all_saved = False
                _logger.warning("Failed to save image for %s: %s", place_id, exc)
                continue
            _logger.info("Saved: %s", path)
            summary.saved_paths.append(path)
        return all_saved
