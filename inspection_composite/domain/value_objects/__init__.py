"""Value objects - immutable data with validation."""

from .geometry import Point, BoundingBox, CropRegion
from .config import QualityVerdict, RenderConfig
from .layout import LayoutResult

__all__ = [
    'Point',
    'BoundingBox',
    'CropRegion',
    'QualityVerdict',
    'RenderConfig',
    'LayoutResult',
]
