"""Domain models for place lookups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PlaceQuery:
    """Either an explicit place id or a random place search."""

    place_id: str | None = None

    def __post_init__(self) -> None:
        if self.place_id is not None and not self.place_id:
            raise ValueError("place_id must not be empty")

    @classmethod
    def explicit(cls, place_id: str) -> "PlaceQuery":
        """Query a known place."""
        return cls(place_id=place_id)

    @classmethod
    def random(cls) -> "PlaceQuery":
        """Query a randomly searched place."""
        return cls(place_id=None)

    @property
    def is_random(self) -> bool:
        return self.place_id is None


@dataclass(frozen=True)
class PhotoReference:
    """Opaque Places photo token with an optional width hint."""

    reference: str
    max_width: int | None = None


@dataclass(frozen=True)
class LocatedPhotos:
    """Photos found for a resolved place."""

    place_id: str
    photos: tuple[PhotoReference, ...]
    place_name: str | None = None
