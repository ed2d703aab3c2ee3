"""Gallery listing service."""

from dataclasses import dataclass

from cat_gallery.services.storage import ImageStore

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class GalleryEntry:
    """Display data for one stored image."""

    url: str
    filename: str
    place_id: str
    created_at: str


@dataclass
class GalleryService:
    """Lists stored images for display."""

    store: ImageStore
    url_prefix: str = "/storage"

    def list_entries(self) -> list[GalleryEntry]:
        """Return gallery entries, newest first."""
        return [
            GalleryEntry(
                url=f"{self.url_prefix}/{record.path}",
                filename=record.filename,
                place_id=record.place_id,
                created_at=record.modified_at.strftime(TIMESTAMP_FORMAT),
            )
            for record in self.store.list_images()
        ]
