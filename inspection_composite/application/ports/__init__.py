"""Ports - interfaces for external dependencies (Dependency Inversion)."""

from .storage import Storage, LocalFileStorage, MemoryStorage
from .cache import Cache, MemoryCache
from .event_publisher import EventPublisher, RenderEvent, SimpleEventPublisher

__all__ = [
    'Storage',
    'LocalFileStorage',
    'MemoryStorage',
    'Cache',
    'MemoryCache',
    'EventPublisher',
    'RenderEvent',
    'SimpleEventPublisher',
]
