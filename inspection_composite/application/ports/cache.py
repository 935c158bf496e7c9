"""Cache port - interface for caching."""

from __future__ import annotations

from typing import Hashable, Protocol, runtime_checkable


@runtime_checkable
class Cache(Protocol):
    """Port for caching operations."""

    def get(self, key: Hashable) -> object | None:
        """Get value from cache."""
        ...

    def set(self, key: Hashable, value: object) -> None:
        """Set value in cache."""
        ...

    def delete(self, key: Hashable) -> None:
        """Delete key from cache."""
        ...

    def clear(self) -> None:
        """Clear all cached values."""
        ...

    def has(self, key: Hashable) -> bool:
        """Check if key exists in cache."""
        ...


class MemoryCache:
    """Simple in-memory cache implementation."""

    def __init__(self, max_size: int = 16):
        self._data: dict[Hashable, object] = {}
        self._max_size = max_size

    def get(self, key: Hashable) -> object | None:
        return self._data.get(key)

    def set(self, key: Hashable, value: object) -> None:
        # At capacity: evict the oldest insertion
        if len(self._data) >= self._max_size and key not in self._data:
            self._data.pop(next(iter(self._data)))
        self._data[key] = value

    def delete(self, key: Hashable) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def has(self, key: Hashable) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
