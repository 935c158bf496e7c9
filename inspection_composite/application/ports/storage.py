"""Storage port - where finished composites are written."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from ...exceptions import ImageEncodeError

logger = logging.getLogger(__name__)


@runtime_checkable
class Storage(Protocol):
    """Port for persisting encoded composites.

    Implementations: local filesystem, browser blob store, in-memory, etc.
    A write must be all-or-nothing: after a failure nothing is visible at
    ``path``.
    """

    def write_bytes(self, path: Path, data: bytes) -> Path:
        """Write ``data`` to ``path`` and return the final location."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if something is stored at ``path``."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read back what was stored at ``path``."""
        ...

    def delete(self, path: Path) -> None:
        """Remove whatever is stored at ``path``; a missing entry is not an error."""
        ...


class LocalFileStorage:
    """Atomic writes to the local filesystem (temp file + rename)."""

    def __init__(self, create_dirs: bool = True):
        self._create_dirs = create_dirs

    def write_bytes(self, path: Path, data: bytes) -> Path:
        path = Path(path)
        if self._create_dirs:
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ImageEncodeError(
                    f"Cannot create output directory: {e}", output_path=str(path)
                ) from e

        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise ImageEncodeError(f"Failed to write file: {e}", output_path=str(path)) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning(f"Could not remove temporary file {tmp_name}")

        logger.debug(f"Wrote {len(data)} bytes to {path}")
        return path

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def delete(self, path: Path) -> None:
        Path(path).unlink(missing_ok=True)


class MemoryStorage:
    """In-memory storage, for callers without a writable filesystem."""

    def __init__(self):
        self._files: dict[Path, bytes] = {}

    def write_bytes(self, path: Path, data: bytes) -> Path:
        path = Path(path)
        self._files[path] = bytes(data)
        return path

    def exists(self, path: Path) -> bool:
        return Path(path) in self._files

    def read_bytes(self, path: Path) -> bytes:
        try:
            return self._files[Path(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def delete(self, path: Path) -> None:
        self._files.pop(Path(path), None)

    def __len__(self) -> int:
        return len(self._files)
