"""Flat-file storage for extracted cat images."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from cat_gallery.domain.gallery import StoredImageRecord, place_id_from_filename

IMAGE_DIRECTORY = "cats"
IMAGE_EXTENSION = "jpg"


class ImageStore(Protocol):
    """Persistence interface for output images."""

    def save(self, data: bytes, place_id: str) -> str:
        """Store image bytes and return the relative path."""

    def list_images(self) -> list[StoredImageRecord]:
        """Return stored images, newest first."""


@dataclass
class LocalImageStore(ImageStore):
    """Stores images under a public directory on the local filesystem."""

    root: Path
    directory: str = IMAGE_DIRECTORY

    def save(self, data: bytes, place_id: str) -> str:
        """Write bytes to `{directory}/{place_id}_{unique}.jpg`."""
        relative_path = f"{self.directory}/{place_id}_{uuid4().hex}.{IMAGE_EXTENSION}"
        target = self.root / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return relative_path

    def list_images(self) -> list[StoredImageRecord]:
        """List stored images sorted by modification time, newest first."""
        image_dir = self.root / self.directory
        if not image_dir.is_dir():
            return []
        records = []
        for file_path in image_dir.iterdir():
            if not file_path.is_file():
                continue
            records.append(
                StoredImageRecord(
                    filename=file_path.name,
                    path=f"{self.directory}/{file_path.name}",
                    place_id=place_id_from_filename(file_path.name),
                    modified_at=datetime.fromtimestamp(file_path.stat().st_mtime),
                )
            )
        records.sort(key=lambda record: record.modified_at, reverse=True)
        return records
