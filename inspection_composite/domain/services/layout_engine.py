"""Layout engine - composite canvas geometry from image sizes.

Pure and deterministic: the same four dimensions and constants always give
the same LayoutResult. The review screen relies on this to re-derive where
the compositor put things without re-reading the composite.
"""

from __future__ import annotations

import logging
import math

from ...config import LAYOUT, LayoutConstants
from ...exceptions import InvalidImageDimensions
from ..value_objects.layout import LayoutResult

logger = logging.getLogger(__name__)


def fit_scale(width: int, height: int, max_width: int, max_height: int) -> float:
    """Scale factor that fits ``width x height`` inside the box, keeping aspect."""
    return min(max_width / width, max_height / height)


def scale_dimension(value: int, scale: float) -> int:
    """Round half-up and never go below one pixel."""
    return max(1, math.floor(value * scale + 0.5))


def layout(
    source_width: int,
    source_height: int,
    detail_width: int,
    detail_height: int,
    constants: LayoutConstants = LAYOUT
) -> LayoutResult:
    """Compute canvas size and placements for a composite.

    Args:
        source_width: Original photo width in pixels
        source_height: Original photo height in pixels
        detail_width: Detail bitmap width in pixels (its own size, not the crop's)
        detail_height: Detail bitmap height in pixels
        constants: Layout constants

    Returns:
        Frozen LayoutResult

    Raises:
        InvalidImageDimensions: If any dimension is zero or negative
    """
    dims = (source_width, source_height, detail_width, detail_height)
    if any(d <= 0 for d in dims):
        raise InvalidImageDimensions(
            f"Image dimensions must be positive, got source={source_width}x{source_height} "
            f"detail={detail_width}x{detail_height}",
            dimensions=dims
        )

    c = constants
    b2 = c.border_width * 2

    scale_original = fit_scale(
        source_width, source_height, c.available_original_width, c.available_height
    )
    scale_detail = fit_scale(
        detail_width, detail_height, c.available_detail_width, c.available_height
    )

    scaled_original_w = scale_dimension(source_width, scale_original)
    scaled_original_h = scale_dimension(source_height, scale_original)
    scaled_detail_w = scale_dimension(detail_width, scale_detail)
    scaled_detail_h = scale_dimension(detail_height, scale_detail)

    total_width = c.padding + scaled_original_w + c.spacing + b2 + scaled_detail_w + c.padding
    total_height = (
        c.header_height + c.padding
        + max(scaled_original_h, scaled_detail_h + b2)
        + c.padding + c.footer_height
    )

    # Vertical slack shared by both columns
    inner_height = total_height - c.header_height - c.footer_height - c.padding * 2

    original_x = c.padding
    original_y = c.header_height + c.padding + (inner_height - scaled_original_h) // 2

    detail_area_x = c.padding + scaled_original_w + c.spacing
    detail_area_y = c.header_height + c.padding + (inner_height - scaled_detail_h - b2) // 2

    result = LayoutResult(
        source_width=source_width,
        source_height=source_height,
        detail_width=detail_width,
        detail_height=detail_height,
        border_width=c.border_width,
        header_height=c.header_height,
        footer_height=c.footer_height,
        scale_original=scale_original,
        scale_detail=scale_detail,
        scaled_original_width=scaled_original_w,
        scaled_original_height=scaled_original_h,
        scaled_detail_width=scaled_detail_w,
        scaled_detail_height=scaled_detail_h,
        total_width=total_width,
        total_height=total_height,
        original_x=original_x,
        original_y=original_y,
        detail_area_x=detail_area_x,
        detail_area_y=detail_area_y,
    )
    logger.debug(f"Layout {dims} -> canvas {result.size}")
    return result


def estimated_detail_size(constants: LayoutConstants = LAYOUT) -> tuple[int, int]:
    """Detail size assumed when the real detail bitmap is no longer available.

    Fills the whole detail column. Misplaces the arrow when the real detail's
    aspect ratio differs, so prefer a saved LayoutResult when there is one.
    """
    return (constants.available_detail_width, constants.available_height)
