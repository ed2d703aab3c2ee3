"""Decide which parts of a photo to keep based on cat detections."""

import logging
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from typing import Protocol

from PIL import Image

from cat_gallery.domain.detection import CropRegion, DetectedObject

CAT_LABEL = "cat"

_logger = logging.getLogger(__name__)


class OutputMode(str, Enum):
    """Output policy for a pipeline run."""

    CROP = "crop"
    PASSTHROUGH = "passthrough"


class OutputPolicy(Protocol):
    """Turn one photo and its detections into zero or more outputs."""

    def select(self, image_bytes: bytes, objects: list[DetectedObject]) -> list[bytes]:
        """Return encoded images to store."""


def is_cat(obj: DetectedObject) -> bool:
    """Return True for a usable detection labelled cat in any case."""
    return obj.is_usable and obj.label.strip().lower() == CAT_LABEL


@dataclass
class CropPolicy(OutputPolicy):
    """Crop each cat bounding box out of the source image."""

    min_detection_size: int = 20
    jpeg_quality: int = 90

    def select(self, image_bytes: bytes, objects: list[DetectedObject]) -> list[bytes]:
        """Return one JPEG crop per sufficiently large cat."""
        cats = [obj for obj in objects if is_cat(obj)]
        if not cats:
            return []

        with Image.open(BytesIO(image_bytes)) as image:
            image.load()
            width, height = image.size
            crops: list[bytes] = []
            for cat in cats:
                region = _clamp_region(
                    CropRegion.from_polygon(cat.polygon, width, height), width, height
                )
                if (
                    region.width < self.min_detection_size
                    or region.height < self.min_detection_size
                ):
                    _logger.info(
                        "Skipping small detection %sx%s (minimum %spx)",
                        region.width,
                        region.height,
                        self.min_detection_size,
                    )
                    continue
                crops.append(self._encode(image.crop(region.as_box())))
        return crops

    def _encode(self, image: Image.Image) -> bytes:
        if image.mode != "RGB":
            image = image.convert("RGB")
        buffer = BytesIO()
        image.save(buffer, format="JPEG", quality=self.jpeg_quality)
        return buffer.getvalue()


@dataclass
class PassThroughPolicy(OutputPolicy):
    """Keep the original image once if any cat is present."""

    def select(self, image_bytes: bytes, objects: list[DetectedObject]) -> list[bytes]:
        """Return the unmodified bytes when at least one cat was detected."""
        if any(is_cat(obj) for obj in objects):
            return [image_bytes]
        return []


def build_policy(
    mode: OutputMode, *, min_detection_size: int = 20, jpeg_quality: int = 90
) -> OutputPolicy:
    """Create the output policy for a configured mode."""
    if mode is OutputMode.PASSTHROUGH:
        return PassThroughPolicy()
    return CropPolicy(min_detection_size=min_detection_size, jpeg_quality=jpeg_quality)


def _clamp_region(region: CropRegion, width: int, height: int) -> CropRegion:
    """Keep a region inside the image bounds."""
    x = min(max(region.x, 0), width)
    y = min(max(region.y, 0), height)
    return CropRegion(
        x=x,
        y=y,
        width=max(min(region.width, width - x), 0),
        height=max(min(region.height, height - y), 0),
    )
