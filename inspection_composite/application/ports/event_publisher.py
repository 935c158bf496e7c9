"""Event Publisher port - interface for publishing render events."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class RenderEvent:
    """Event during compositing."""
    stage: str
    message: str
    progress: float | None = None  # 0.0 to 1.0
    output_path: Path | None = None


@runtime_checkable
class EventPublisher(Protocol):
    """Port for publishing render events."""

    def publish(self, event: RenderEvent) -> None:
        """Publish an event."""
        ...

    def subscribe(self, callback: Callable[[RenderEvent], None]) -> None:
        """Subscribe to events."""
        ...


class SimpleEventPublisher:
    """Synchronous event publisher; safe to publish from worker threads."""

    def __init__(self):
        self._subscribers: list[Callable[[RenderEvent], None]] = []
        self._lock = threading.Lock()

    def publish(self, event: RenderEvent) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(event)

    def subscribe(self, callback: Callable[[RenderEvent], None]) -> None:
        with self._lock:
            self._subscribers.append(callback)
