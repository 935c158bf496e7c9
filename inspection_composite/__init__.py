"""Inspection Composite - documentation images for quality inspections.

Lays out an original photo next to an enlarged, verdict-bordered detail
crop with header/footer metadata, and re-derives that layout later to draw
an arrow from the crop area to the detail.
"""

__version__ = "1.0.0"

from .config import LAYOUT, LayoutConstants
from .domain import (
    AnnotationMetadata,
    ArrowGeometry,
    CompositeResult,
    CropRegion,
    Image,
    LayoutResult,
    QualityVerdict,
    RenderConfig,
    TextLayout,
    compute_arrow_geometry,
    layout,
    quality_color,
)
from .application import (
    ArrowOverlayRenderer,
    CompositeJob,
    CompositeJobRunner,
    Compositor,
    OverlayInputs,
)
from .exceptions import (
    InspectionCompositeError,
    ConfigurationError,
    InvalidImageDimensions,
    ImageDecodeError,
    ImageEncodeError,
    MissingSourceFile,
)
from .utils.env import setup_logging

__all__ = [
    '__version__',
    'LAYOUT',
    'LayoutConstants',
    'AnnotationMetadata',
    'ArrowGeometry',
    'CompositeResult',
    'CropRegion',
    'Image',
    'LayoutResult',
    'QualityVerdict',
    'RenderConfig',
    'TextLayout',
    'compute_arrow_geometry',
    'layout',
    'quality_color',
    'ArrowOverlayRenderer',
    'CompositeJob',
    'CompositeJobRunner',
    'Compositor',
    'OverlayInputs',
    'setup_logging',
    # Exceptions
    'InspectionCompositeError',
    'ConfigurationError',
    'InvalidImageDimensions',
    'ImageDecodeError',
    'ImageEncodeError',
    'MissingSourceFile',
]
