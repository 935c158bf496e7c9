"""Core raster operations."""

from .image_ops import (
    new_canvas,
    fill_box,
    draw_outline,
    to_8bit,
    resize_linear,
    paste_image,
    load_font,
    draw_text,
    crop_region,
    encode_image,
)

__all__ = [
    'new_canvas',
    'fill_box',
    'draw_outline',
    'to_8bit',
    'resize_linear',
    'paste_image',
    'load_font',
    'draw_text',
    'crop_region',
    'encode_image',
]
