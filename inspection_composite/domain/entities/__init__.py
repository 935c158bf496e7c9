"""Domain entities."""

from .image import Image, AnnotationMetadata, CompositeResult

__all__ = ['Image', 'AnnotationMetadata', 'CompositeResult']
