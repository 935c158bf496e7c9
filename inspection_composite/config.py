"""Configuration and constants for the inspection composite renderer."""

from dataclasses import dataclass


# Verdict border colors (RGB)
COLOR_GOOD: tuple[int, int, int] = (0x22, 0xC5, 0x5E)
COLOR_BAD: tuple[int, int, int] = (0xEF, 0x44, 0x44)
COLOR_NEUTRAL: tuple[int, int, int] = (0x3B, 0x82, 0xF6)

# Canvas colors
CANVAS_FILL: tuple[int, int, int] = (255, 255, 255)
HEADER_FILL: tuple[int, int, int] = (245, 245, 245)
FOOTER_FILL: tuple[int, int, int] = (245, 245, 245)
TEXT_COLOR_HEADER: tuple[int, int, int] = (50, 50, 50)
TEXT_COLOR_FOOTER: tuple[int, int, int] = (80, 80, 80)
OUTLINE_COLOR: tuple[int, int, int] = (200, 200, 200)


@dataclass(frozen=True)
class LayoutConstants:
    """Fixed geometry of the composite canvas."""
    padding: int = 20
    border_width: int = 8
    header_height: int = 50
    footer_height: int = 40
    spacing: int = 16
    content_height: int = 400
    original_ratio: float = 0.4
    detail_ratio: float = 0.6

    # Text placement
    header_text_offset: int = 8  # Text top sits this far above the header midline
    footer_text_offset: int = 12  # Text top below the footer's top edge
    outline_thickness: int = 2

    @property
    def content_width(self) -> int:
        """Width budget shared by the original and detail columns."""
        return self.content_height * 2 - self.spacing

    @property
    def available_original_width(self) -> int:
        return int(self.content_width * self.original_ratio) - self.padding

    @property
    def available_detail_width(self) -> int:
        return (
            int(self.content_width * self.detail_ratio)
            - self.padding
            - self.border_width * 2
        )

    @property
    def available_height(self) -> int:
        return self.content_height - self.padding * 2


LAYOUT = LayoutConstants()


@dataclass(frozen=True)
class ArrowStyle:
    """Stroke parameters for the review-screen arrow."""
    stroke_width: int = 4
    head_length: float = 12.0
    head_half_angle: float = 0.5  # radians


ARROW_STYLE = ArrowStyle()


# Text metrics
DEFAULT_FONT_SIZE = 24
DEFAULT_CHAR_WIDTH = 12  # Approximate advance per character at DEFAULT_FONT_SIZE

# Metadata strings
DATE_FORMAT = "%d/%m/%Y"
REFERENCE_PREFIX = "Ref"
CREATED_PREFIX = "Created"
MISSING_REFERENCE = "N/A"

# Output
OUTPUT_FORMAT = "PNG"
LAYOUT_SIDECAR_SUFFIX = ".layout.json"

# File handling - formats Pillow decodes out of the box
SUPPORTED_IMAGE_EXTENSIONS: tuple[str, ...] = (
    '.jpg', '.jpeg', '.jpe',
    '.png',
    '.bmp', '.dib',
    '.tiff', '.tif',
    '.webp',
    '.gif',
    '.ppm', '.pgm', '.pbm', '.pnm',
)

# Environment
ENV_PREFIX = "INSPECTION_COMPOSITE_"


# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
