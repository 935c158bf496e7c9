"""Application services - orchestrate use cases."""

from .compositor import Compositor
from .arrow_overlay import ArrowOverlayRenderer, OverlayInputs, load_layout_sidecar
from .composite_jobs import CompositeJob, CompositeJobRunner, BatchResult, JobOutcome

__all__ = [
    'Compositor',
    'ArrowOverlayRenderer',
    'OverlayInputs',
    'load_layout_sidecar',
    'CompositeJob',
    'CompositeJobRunner',
    'BatchResult',
    'JobOutcome',
]
