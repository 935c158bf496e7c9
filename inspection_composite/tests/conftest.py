"""Shared fixtures for composite tests."""

from datetime import datetime

import numpy as np
import pytest
from PIL import Image as PILImage

from inspection_composite.domain.entities.image import AnnotationMetadata, Image


def _gradient(width: int, height: int) -> np.ndarray:
    """RGB gradient so resizes produce varied, non-border-colored pixels."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    r = np.tile(xs, (height, 1))
    g = np.tile(ys[:, None], (1, width))
    b = np.full((height, width), 128, dtype=np.float32)
    return np.stack([r, g, b], axis=-1).astype(np.uint8)


@pytest.fixture
def source_image() -> Image:
    """1200x800 source photo."""
    return Image.from_array(_gradient(1200, 800))


@pytest.fixture
def detail_image() -> Image:
    """400x300 solid black detail crop."""
    return Image.from_array(np.zeros((300, 400, 3), dtype=np.uint8))


@pytest.fixture
def metadata() -> AnnotationMetadata:
    return AnnotationMetadata(
        description="Weld seam porosity",
        reference_label="REF-042",
        created_at=datetime(2024, 3, 7, 14, 30),
    )


@pytest.fixture
def source_file(tmp_path, source_image):
    path = tmp_path / "source.png"
    source_image.data.save(path)
    return path


@pytest.fixture
def detail_file(tmp_path, detail_image):
    path = tmp_path / "detail.png"
    detail_image.data.save(path)
    return path


@pytest.fixture
def corrupt_file(tmp_path):
    path = tmp_path / "corrupt.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n this is not really a png")
    return path


@pytest.fixture
def zero_width_image() -> Image:
    return Image.from_pil(PILImage.new("RGB", (0, 10)))
