"""Arrow overlay - points from the crop area to the detail on the review screen.

The review screen only has the reloaded source photo, the reloaded composite
and the crop rectangle. Geometry is re-derived through the layout engine;
the detail size comes from the layout sidecar when the compositor wrote one,
otherwise from the fixed content-box estimate.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from PIL import Image as PILImage, ImageDraw

from ...config import ARROW_STYLE, LAYOUT, ArrowStyle, LayoutConstants
from ...domain.entities.image import Image
from ...domain.services.arrow_geometry import ArrowGeometry, compute_arrow_geometry
from ...domain.services.color_map import quality_color
from ...domain.services.layout_engine import estimated_detail_size, layout
from ...domain.value_objects.config import QualityVerdict
from ...domain.value_objects.geometry import CropRegion
from ...domain.value_objects.layout import LayoutResult
from ...exceptions import ImageDecodeError, MissingSourceFile
from ..ports.cache import Cache, MemoryCache
from ..ports.storage import LocalFileStorage, Storage
from .compositor import composite_digest, sidecar_path_for

logger = logging.getLogger(__name__)


def load_layout_sidecar(
    composite_path: Path | str,
    storage: Storage | None = None,
    composite_sha256: str | None = None
) -> LayoutResult | None:
    """Read the layout the compositor saved next to a composite, if any.

    Args:
        composite_path: Where the composite was written
        storage: Where to read from (local filesystem by default)
        composite_sha256: Digest of the composite as loaded; when given, a
            sidecar recorded for different bytes is ignored

    Returns:
        The saved LayoutResult, or None when there is no usable sidecar
    """
    storage = storage or LocalFileStorage()
    path = sidecar_path_for(Path(composite_path))
    if not storage.exists(path):
        return None
    try:
        payload = json.loads(storage.read_bytes(path).decode("utf-8"))
        if composite_sha256 is not None and payload.get("composite_sha256") != composite_sha256:
            logger.warning(f"Layout sidecar {path} belongs to a different composite; ignoring it")
            return None
        return LayoutResult.from_dict(payload["layout"])
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Ignoring unreadable layout sidecar {path}: {e}")
        return None


def _read_image(storage: Storage, path: Path | str) -> tuple[Image, bytes]:
    path = Path(path)
    if not storage.exists(path):
        raise MissingSourceFile("Image not found in storage", image_path=str(path))
    try:
        data = storage.read_bytes(path)
    except OSError as e:
        raise ImageDecodeError(f"Failed to read image: {e}", image_path=str(path)) from e
    return Image.from_bytes(data, source_path=path), data


@dataclass
class OverlayInputs:
    """What the review screen has gathered so far.

    Source and composite load independently; nothing is drawn until both
    are present. Reads go through ``storage`` so composites kept in memory
    or elsewhere reuse their layout sidecar too.
    """
    crop: CropRegion | None = None
    verdict: QualityVerdict = QualityVerdict.NEUTRAL
    source: Image | None = None
    composite: Image | None = None
    exact_layout: LayoutResult | None = None
    storage: Storage = field(default_factory=LocalFileStorage)

    @property
    def ready(self) -> bool:
        return (
            self.crop is not None
            and self.source is not None
            and self.composite is not None
        )

    def load_source(self, path: Path | str) -> None:
        """Reload the original photo."""
        self.source, _ = _read_image(self.storage, path)

    def load_composite(self, path: Path | str) -> None:
        """Reload the composite and pick up its layout sidecar if it matches."""
        self.composite, data = _read_image(self.storage, path)
        self.exact_layout = load_layout_sidecar(path, self.storage, composite_digest(data))


class ArrowOverlayRenderer:
    """Draws the crop-to-detail arrow on a transparent layer over the composite."""

    def __init__(
        self,
        cache: Cache | None = None,
        constants: LayoutConstants = LAYOUT,
        style: ArrowStyle = ARROW_STYLE
    ):
        self._cache = cache or MemoryCache(max_size=4)
        self._constants = constants
        self._style = style

    def resolve_layout(self, inputs: OverlayInputs) -> LayoutResult:
        """Exact layout when it matches the loaded images, else the estimate."""
        exact = inputs.exact_layout
        if exact is not None:
            if (
                exact.size == inputs.composite.size
                and (exact.source_width, exact.source_height) == inputs.source.size
            ):
                return exact
            logger.warning(
                f"Layout sidecar {exact.size} does not match composite "
                f"{inputs.composite.size}; estimating instead"
            )

        est_w, est_h = estimated_detail_size(self._constants)
        return layout(
            inputs.source.width, inputs.source.height, est_w, est_h, self._constants
        )

    def geometry(self, inputs: OverlayInputs) -> ArrowGeometry | None:
        """Arrow geometry, or None while inputs are incomplete."""
        if not inputs.ready:
            return None
        return compute_arrow_geometry(inputs.crop, self.resolve_layout(inputs), self._style)

    def render(self, inputs: OverlayInputs) -> PILImage.Image | None:
        """RGBA layer the size of the composite with the arrow drawn on it.

        Returns None (draws nothing) until source, composite and crop are
        all available. Repeated calls with the same crop, verdict and image
        objects return the cached layer.
        """
        if not inputs.ready:
            logger.debug("Overlay inputs not ready; skipping arrow")
            return None

        key = self._cache_key(inputs)
        cached = self._cache.get(key)
        if cached is not None:
            source_ref, composite_ref, layer = cached
            if source_ref is inputs.source and composite_ref is inputs.composite:
                return layer

        geom = self.geometry(inputs)
        layer = PILImage.new("RGBA", inputs.composite.size, (0, 0, 0, 0))
        self.paint(ImageDraw.Draw(layer), geom, inputs.verdict)

        # Keep the images referenced so their ids stay unique while cached
        self._cache.set(key, (inputs.source, inputs.composite, layer))
        return layer

    def preview(self, inputs: OverlayInputs) -> PILImage.Image | None:
        """Composite with the arrow blended on top, for display."""
        layer = self.render(inputs)
        if layer is None:
            return None
        base = inputs.composite.data.convert("RGBA")
        return PILImage.alpha_composite(base, layer)

    def paint(self, draw: ImageDraw.ImageDraw, geom: ArrowGeometry, verdict: Any) -> None:
        """Draw the line with round caps and the filled arrowhead."""
        color = quality_color(verdict) + (255,)
        width = self._style.stroke_width
        radius = width / 2

        draw.line([geom.start.as_tuple(), geom.end.as_tuple()], fill=color, width=width)
        for cap in (geom.start, geom.end):
            draw.ellipse(
                [cap.x - radius, cap.y - radius, cap.x + radius, cap.y + radius],
                fill=color
            )
        draw.polygon([p.as_tuple() for p in geom.head], fill=color)

    def _cache_key(self, inputs: OverlayInputs) -> tuple:
        return (
            inputs.crop,
            QualityVerdict.from_code(inputs.verdict),
            id(inputs.source),
            id(inputs.composite),
            inputs.exact_layout,
        )

    def invalidate(self) -> None:
        """Drop cached layers."""
        self._cache.clear()
