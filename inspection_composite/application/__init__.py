"""Application layer - use cases and orchestration."""

from .services.compositor import Compositor
from .services.arrow_overlay import ArrowOverlayRenderer, OverlayInputs
from .services.composite_jobs import CompositeJob, CompositeJobRunner

__all__ = [
    'Compositor',
    'ArrowOverlayRenderer',
    'OverlayInputs',
    'CompositeJob',
    'CompositeJobRunner',
]
