"""Models for object localization results."""

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

_POLYGON_VERTEX_COUNT = 4


class NormalizedVertex(BaseModel):
    """A point expressed as a fraction of image width and height."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(default=0.0, ge=0.0, le=1.0)
    y: float = Field(default=0.0, ge=0.0, le=1.0)


class BoundingPolygon(BaseModel):
    """Four-vertex polygon ordered top-left, top-right, bottom-right, bottom-left."""

    model_config = ConfigDict(frozen=True)

    vertices: tuple[
        NormalizedVertex, NormalizedVertex, NormalizedVertex, NormalizedVertex
    ]

    @classmethod
    def from_points(
        cls, points: Sequence[tuple[float, float]]
    ) -> "BoundingPolygon | None":
        """Build a polygon, or return None when fewer than four points exist."""
        if len(points) < _POLYGON_VERTEX_COUNT:
            return None
        vertices = tuple(
            NormalizedVertex(x=_clamp(x), y=_clamp(y))
            for x, y in points[:_POLYGON_VERTEX_COUNT]
        )
        return cls(vertices=vertices)

    @property
    def top_left(self) -> NormalizedVertex:
        return self.vertices[0]

    @property
    def bottom_right(self) -> NormalizedVertex:
        return self.vertices[2]


class DetectedObject(BaseModel):
    """Single localized object returned by the vision service."""

    model_config = ConfigDict(frozen=True)

    label: str
    score: float = Field(default=0.0, ge=0.0, le=1.0)
    polygon: BoundingPolygon | None = None

    @property
    def is_usable(self) -> bool:
        return self.polygon is not None


@dataclass(frozen=True)
class CropRegion:
    """Absolute pixel rectangle within a source image."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_polygon(
        cls, polygon: BoundingPolygon, image_width: int, image_height: int
    ) -> "CropRegion":
        """Scale the polygon's opposite corners to the nearest pixel."""
        top_left = polygon.top_left
        bottom_right = polygon.bottom_right
        return cls(
            x=round(top_left.x * image_width),
            y=round(top_left.y * image_height),
            width=round((bottom_right.x - top_left.x) * image_width),
            height=round((bottom_right.y - top_left.y) * image_height),
        )

    def as_box(self) -> tuple[int, int, int, int]:
        """Return a (left, upper, right, lower) box for Pillow."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def _clamp(value: float) -> float:
    return min(max(float(value), 0.0), 1.0)
