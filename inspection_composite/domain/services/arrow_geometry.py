"""Arrow from the crop area on the original photo to the detail border."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ...config import ARROW_STYLE, ArrowStyle
from ..value_objects.geometry import BoundingBox, CropRegion, Point
from ..value_objects.layout import LayoutResult


@dataclass(frozen=True, slots=True)
class ArrowGeometry:
    """Everything needed to paint the arrow, in composite pixel space."""
    start: Point
    end: Point
    border: BoundingBox
    angle: float
    head: tuple[Point, Point, Point]

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)


def crop_center_in_composite(crop: CropRegion, result: LayoutResult) -> Point:
    """Map the crop rectangle's center from source pixels into the composite."""
    center = crop.center
    return Point(
        result.original_x + center.x * result.scale_original,
        result.original_y + center.y * result.scale_original,
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def compute_arrow_geometry(
    crop: CropRegion,
    result: LayoutResult,
    style: ArrowStyle = ARROW_STYLE
) -> ArrowGeometry:
    """Compute the arrow for a crop region under a given layout.

    The line aims at the center of the detail border. Its end is the point
    where that line crosses the border's left edge, with y clamped into the
    border's vertical span so the tip never leaves the rectangle.
    """
    start = crop_center_in_composite(crop, result)
    border = result.detail_area_box
    target = border.center

    dx = target.x - start.x
    dy = target.y - start.y

    end_x = border.min_x
    if dx != 0:
        slope = dy / dx
        end_y = start.y + slope * (border.min_x - start.x)
    else:
        end_y = start.y
    end = Point(end_x, _clamp(end_y, border.min_y, border.max_y))

    arrow_dx = end.x - start.x
    arrow_dy = end.y - start.y
    angle = 0.0 if arrow_dx == 0 and arrow_dy == 0 else math.atan2(arrow_dy, arrow_dx)

    length = style.head_length
    half = style.head_half_angle
    head = (
        end,
        Point(end.x - length * math.cos(angle - half), end.y - length * math.sin(angle - half)),
        Point(end.x - length * math.cos(angle + half), end.y - length * math.sin(angle + half)),
    )
    return ArrowGeometry(start=start, end=end, border=border, angle=angle, head=head)
