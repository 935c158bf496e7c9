"""Domain layer - pure business logic, no I/O."""

from .entities.image import AnnotationMetadata, CompositeResult, Image
from .services.arrow_geometry import ArrowGeometry, compute_arrow_geometry
from .services.color_map import quality_color
from .services.layout_engine import estimated_detail_size, layout
from .services.text_layout import TextLayout
from .value_objects.config import QualityVerdict, RenderConfig
from .value_objects.geometry import BoundingBox, CropRegion, Point
from .value_objects.layout import LayoutResult

__all__ = [
    # Entities
    'Image',
    'AnnotationMetadata',
    'CompositeResult',
    # Value Objects
    'QualityVerdict',
    'RenderConfig',
    'Point',
    'BoundingBox',
    'CropRegion',
    'LayoutResult',
    # Services
    'layout',
    'estimated_detail_size',
    'quality_color',
    'TextLayout',
    'ArrowGeometry',
    'compute_arrow_geometry',
]
