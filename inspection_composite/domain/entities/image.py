"""Image entity - abstraction over decoded bitmaps."""

from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol, runtime_checkable

from ...exceptions import ImageDecodeError, MissingSourceFile
from ..value_objects.config import QualityVerdict
from ..value_objects.layout import LayoutResult


@runtime_checkable
class ImageData(Protocol):
    """Protocol for image data - allows different backends."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    @property
    def mode(self) -> str: ...

    def convert(self, mode: str) -> ImageData: ...


@dataclass(frozen=True, slots=True)
class Image:
    """Domain entity representing a decoded bitmap.

    Used for the source photo, the detail crop and the reloaded composite.
    Wraps underlying image data without exposing implementation details.
    """
    _data: ImageData
    source_path: Path | None = None

    @property
    def width(self) -> int:
        return self._data.width

    @property
    def height(self) -> int:
        return self._data.height

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def mode(self) -> str:
        return self._data.mode

    @property
    def data(self) -> ImageData:
        """Underlying bitmap (a Pillow image for the built-in loaders)."""
        return self._data

    def convert(self, mode: str) -> Image:
        """Convert to different color mode."""
        return Image(
            _data=self._data.convert(mode),
            source_path=self.source_path
        )

    @classmethod
    def from_file(cls, path: Path | str) -> Image:
        """Load and fully decode an image file.

        Raises:
            MissingSourceFile: If the path does not exist
            ImageDecodeError: If the file is not a decodable bitmap
        """
        path = Path(path)
        if not path.is_file():
            raise MissingSourceFile("Source file not found", image_path=str(path))
        return cls(_data=_decode(path, str(path)), source_path=path)

    @classmethod
    def from_bytes(cls, data: bytes, source_path: Path | None = None) -> Image:
        """Decode an encoded bitmap held in memory."""
        label = str(source_path) if source_path else None
        return cls(_data=_decode(io.BytesIO(data), label), source_path=source_path)

    @classmethod
    def from_array(cls, data: object, source_path: Path | None = None) -> Image:
        """Create from numpy array or other data."""
        from PIL import Image as PILImage
        return cls(_data=PILImage.fromarray(data), source_path=source_path)

    @classmethod
    def from_pil(cls, data: object, source_path: Path | None = None) -> Image:
        """Wrap an already decoded Pillow image."""
        return cls(_data=data, source_path=source_path)

    def to_array(self) -> object:
        """Convert to numpy array."""
        import numpy as np
        return np.array(self._data)


def _decode(fp: object, label: str | None) -> ImageData:
    """Open and force-load a bitmap so truncated data fails here, not later."""
    # Lazy import - domain doesn't depend on PIL at import time
    from PIL import Image as PILImage, UnidentifiedImageError

    try:
        with PILImage.open(fp) as opened:
            opened.load()
            # Detach from the file handle; EXIF rotation is left to the caller
            return opened.copy()
    except UnidentifiedImageError as e:
        raise ImageDecodeError("Unrecognized image format", image_path=label) from e
    except (OSError, ValueError, SyntaxError) as e:
        raise ImageDecodeError(f"Failed to decode image: {e}", image_path=label) from e


@dataclass(frozen=True, slots=True)
class AnnotationMetadata:
    """Inspector-supplied text printed in the header and footer."""
    description: str | None = None
    reference_label: str | None = None
    created_at: datetime | None = None

    @property
    def has_description(self) -> bool:
        return bool(self.description and self.description.strip())

    def timestamp(self) -> datetime:
        """Creation time, falling back to now when not set."""
        return self.created_at or datetime.now()


@dataclass(frozen=True, slots=True)
class CompositeResult:
    """Result of rendering and writing one composite."""
    output_path: Path
    layout: LayoutResult
    verdict: QualityVerdict
    sidecar_path: Path | None = None
    processing_time_ms: float = 0.0
