"""Geometry value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """2D point in pixel space (sub-pixel precision allowed)."""
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Point:
        return Point(self.x * scalar, self.y * scalar)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned box given by its min/max edges (max is exclusive for pixels)."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2
        )

    def contains(self, point: Point) -> bool:
        """Check if point lies inside or on the edge of this box."""
        return (
            self.min_x <= point.x <= self.max_x and
            self.min_y <= point.y <= self.max_y
        )

    def intersects(self, other: BoundingBox) -> bool:
        """Check if this box intersects another."""
        return not (
            self.max_x < other.min_x or
            other.max_x < self.min_x or
            self.max_y < other.min_y or
            other.max_y < self.min_y
        )

    def expand(self, pixels: int) -> BoundingBox:
        """Expand box by specified pixels in all directions (negative shrinks)."""
        return BoundingBox(
            self.min_x - pixels,
            self.min_y - pixels,
            self.max_x + pixels,
            self.max_y + pixels
        )

    def as_pil_box(self) -> tuple[int, int, int, int]:
        """Integer (left, upper, right, lower) box as Pillow expects it."""
        return (int(self.min_x), int(self.min_y), int(self.max_x), int(self.max_y))

    @classmethod
    def from_xywh(cls, x: float, y: float, w: float, h: float) -> BoundingBox:
        return cls(x, y, x + w, y + h)


@dataclass(frozen=True, slots=True)
class CropRegion:
    """Rectangle selected by the inspector, in source-image pixels.

    Produced upstream by the crop UI; the renderer does not validate it.
    """
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2, self.top + self.height / 2)

    def to_bbox(self) -> BoundingBox:
        return BoundingBox(self.left, self.top, self.right, self.bottom)

    def clamped_to(self, image_width: int, image_height: int) -> CropRegion:
        """Clamp to image bounds, keeping at least one pixel in each direction."""
        left = min(max(int(self.left), 0), image_width - 1)
        top = min(max(int(self.top), 0), image_height - 1)
        width = min(max(int(self.width), 1), image_width - left)
        height = min(max(int(self.height), 1), image_height - top)
        return CropRegion(left, top, width, height)

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> CropRegion:
        """Create from edges rather than size."""
        return cls(left, top, right - left, bottom - top)
