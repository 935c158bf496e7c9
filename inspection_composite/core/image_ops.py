"""Raster operations used to build and annotate composites."""

import io
import logging
from functools import lru_cache
from typing import Optional

import numpy as np
import numpy.typing as npt
from PIL import Image, ImageDraw, ImageFont

from ..config import DEFAULT_FONT_SIZE, OUTPUT_FORMAT
from ..domain.value_objects.geometry import BoundingBox, CropRegion
from ..exceptions import ConfigurationError, ImageEncodeError

logger = logging.getLogger(__name__)

# Type aliases
RGB = tuple[int, int, int]
ImageArray = npt.NDArray[np.uint8]  # HxWx3
Font = ImageFont.ImageFont | ImageFont.FreeTypeFont


def new_canvas(width: int, height: int, color: RGB) -> Image.Image:
    """Create a solid RGB canvas."""
    return Image.new("RGB", (width, height), color)


def fill_box(canvas: Image.Image, box: BoundingBox, color: RGB) -> None:
    """Fill ``box`` (right/bottom exclusive) with a solid color in place."""
    canvas.paste(color, box.as_pil_box())


def draw_outline(
    canvas: Image.Image,
    box: BoundingBox,
    color: RGB,
    thickness: int = 2
) -> None:
    """Draw a rectangle outline whose outer edge runs along ``box``.

    The right and bottom strokes land on ``max_x``/``max_y`` themselves, one
    pixel outside the pixels the box covers.
    """
    draw = ImageDraw.Draw(canvas)
    draw.rectangle(box.as_pil_box(), outline=color, width=thickness)


_HIGH_BIT_DEPTH_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N")


def to_8bit(image: Image.Image) -> Image.Image:
    """Bring 16-bit and 32-bit integer grayscale down to 8-bit "L".

    Pillow clips these modes at 255 when converting to RGB, which turns an
    ordinary 16-bit PNG white. Values are taken as 16-bit and keep their
    high byte. Other modes are returned unchanged.
    """
    if image.mode not in _HIGH_BIT_DEPTH_MODES:
        return image
    pixels = np.asarray(image).astype(np.int64)
    pixels = np.clip(pixels, 0, 0xFFFF) >> 8
    return Image.fromarray(pixels.astype(np.uint8))


def resize_linear(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Resize with a bilinear filter, keeping alpha if the image has any."""
    image = to_8bit(image)
    mode = "RGBA" if has_alpha(image) else "RGB"
    converted = image if image.mode == mode else image.convert(mode)
    if converted.size == size:
        return converted.copy()
    return converted.resize(size, Image.Resampling.BILINEAR)


def has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )


def paste_image(canvas: Image.Image, image: Image.Image, x: int, y: int) -> None:
    """Paste at (x, y), blending over the canvas where the image is transparent."""
    if image.mode == "RGBA":
        canvas.paste(image, (x, y), mask=image)
    else:
        canvas.paste(image, (x, y))


@lru_cache(maxsize=8)
def load_font(font_path: Optional[str] = None, size: int = DEFAULT_FONT_SIZE) -> Font:
    """Load a TrueType font, or Pillow's bundled default at ``size``.

    Raises:
        ConfigurationError: If ``font_path`` is not a readable font file
    """
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot load font {font_path}: {e}", config_key="font_path"
            ) from e
    return ImageFont.load_default(size=size)


def draw_text(
    canvas: Image.Image,
    text: str,
    x: int,
    y: int,
    color: RGB,
    font: Font
) -> None:
    """Draw ``text`` with its top-left anchor at (x, y)."""
    ImageDraw.Draw(canvas).text((x, y), text, fill=color, font=font)


def crop_region(image: Image.Image, region: CropRegion) -> Image.Image:
    """Crop ``region`` out of ``image`` after clamping it to the image bounds.

    Args:
        image: Source bitmap
        region: Rectangle in source pixels (may overshoot the edges)

    Returns:
        Cropped copy, at least 1x1
    """
    clamped = region.clamped_to(image.width, image.height)
    return image.crop(clamped.to_bbox().as_pil_box())


def encode_image(image: Image.Image, fmt: str = OUTPUT_FORMAT) -> bytes:
    """Encode to bytes in a lossless format.

    Raises:
        ImageEncodeError: If Pillow cannot encode the bitmap
    """
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=fmt)
    except (OSError, ValueError, KeyError) as e:
        raise ImageEncodeError(f"Failed to encode image as {fmt}: {e}") from e
    return buffer.getvalue()


def box_pixels(image: Image.Image, box: BoundingBox) -> ImageArray:
    """Pixels covered by ``box`` as an HxWx3 array."""
    return np.asarray(image.convert("RGB").crop(box.as_pil_box()))


def is_uniform(pixels: ImageArray, color: RGB) -> bool:
    """True if every pixel equals ``color`` exactly."""
    return bool(pixels.size) and bool(np.all(pixels == np.array(color, dtype=np.uint8)))
