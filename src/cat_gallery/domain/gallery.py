"""Domain models for stored gallery images."""

from dataclasses import dataclass
from datetime import datetime

UNKNOWN_PLACE_ID = "unknown"


@dataclass(frozen=True)
class StoredImageRecord:
    """Represents an image file saved to public storage."""

    filename: str
    path: str
    place_id: str
    modified_at: datetime


def place_id_from_filename(filename: str) -> str:
    """Recover the place id as the segment before the first `_`."""
    place_id = filename.partition("_")[0]
    return place_id or UNKNOWN_PLACE_ID
