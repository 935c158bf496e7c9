"""Domain services - pure geometry and lookups, no I/O."""

from .arrow_geometry import ArrowGeometry, compute_arrow_geometry, crop_center_in_composite
from .color_map import quality_color
from .layout_engine import estimated_detail_size, fit_scale, layout, scale_dimension
from .text_layout import TextLayout

__all__ = [
    'ArrowGeometry',
    'compute_arrow_geometry',
    'crop_center_in_composite',
    'quality_color',
    'estimated_detail_size',
    'fit_scale',
    'layout',
    'scale_dimension',
    'TextLayout',
]
