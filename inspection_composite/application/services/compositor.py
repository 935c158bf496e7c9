"""Compositor - renders the documentation image and writes it out."""

from __future__ import annotations

import asyncio
import hashlib
import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from PIL import Image as PILImage

from ...config import (
    CANVAS_FILL,
    FOOTER_FILL,
    HEADER_FILL,
    LAYOUT,
    LAYOUT_SIDECAR_SUFFIX,
    OUTLINE_COLOR,
    OUTPUT_FORMAT,
    TEXT_COLOR_FOOTER,
    TEXT_COLOR_HEADER,
    LayoutConstants,
)
from ...core import image_ops
from ...domain.entities.image import AnnotationMetadata, CompositeResult, Image
from ...domain.services.color_map import quality_color
from ...domain.services.layout_engine import layout
from ...domain.services.text_layout import TextLayout
from ...domain.value_objects.config import QualityVerdict, RenderConfig
from ...domain.value_objects.layout import LayoutResult
from ...exceptions import ImageEncodeError, InspectionCompositeError
from ..ports.event_publisher import EventPublisher, RenderEvent, SimpleEventPublisher
from ..ports.storage import LocalFileStorage, Storage

logger = logging.getLogger(__name__)

ImageSource = Union[Image, Path, str, bytes]


def sidecar_path_for(output_path: Path) -> Path:
    """Where the layout sidecar of a composite lives."""
    return output_path.with_name(output_path.name + LAYOUT_SIDECAR_SUFFIX)


def composite_digest(data: bytes) -> str:
    """SHA-256 of the encoded composite, tying a sidecar to its image."""
    return hashlib.sha256(data).hexdigest()


def load_image(value: ImageSource) -> Image:
    """Accept an Image, a path or encoded bytes and return a decoded Image."""
    if isinstance(value, Image):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Image.from_bytes(bytes(value))
    return Image.from_file(value)


@dataclass
class RenderContext:
    """Context passed through render steps."""
    source: Image
    detail: Image
    verdict: QualityVerdict
    metadata: AnnotationMetadata
    config: RenderConfig
    constants: LayoutConstants
    layout: LayoutResult | None = None
    canvas: PILImage.Image | None = None


class RenderStep:
    """Base class for render steps."""

    def __init__(self, name: str):
        self.name = name

    def execute(self, ctx: RenderContext) -> RenderContext:
        """Execute this step and return updated context."""
        raise NotImplementedError


class ComputeLayoutStep(RenderStep):
    """Step 1: Geometry from the true bitmap sizes."""

    def __init__(self):
        super().__init__("layout")

    def execute(self, ctx: RenderContext) -> RenderContext:
        ctx.layout = layout(
            ctx.source.width, ctx.source.height,
            ctx.detail.width, ctx.detail.height,
            ctx.constants
        )
        logger.debug(
            f"Layout: canvas={ctx.layout.size} "
            f"original={ctx.layout.scaled_original_size} detail={ctx.layout.scaled_detail_size}"
        )
        return ctx


class CanvasStep(RenderStep):
    """Step 2: White canvas."""

    def __init__(self):
        super().__init__("canvas")

    def execute(self, ctx: RenderContext) -> RenderContext:
        ctx.canvas = image_ops.new_canvas(
            ctx.layout.total_width, ctx.layout.total_height, CANVAS_FILL
        )
        return ctx


class HeaderFooterStep(RenderStep):
    """Steps 3-4: Gray bands with description, reference and date."""

    def __init__(self):
        super().__init__("header_footer")

    def execute(self, ctx: RenderContext) -> RenderContext:
        lay = ctx.layout
        c = ctx.constants
        cfg = ctx.config
        text = TextLayout(cfg.char_width)
        font_path = str(cfg.font_path) if cfg.font_path else None
        font = image_ops.load_font(font_path, cfg.font_size)

        image_ops.fill_box(ctx.canvas, lay.header_box, HEADER_FILL)
        if ctx.metadata.has_description:
            description = ctx.metadata.description.strip()
            image_ops.draw_text(
                ctx.canvas, description,
                text.centered_x(description, lay.total_width),
                c.header_height // 2 - c.header_text_offset,
                TEXT_COLOR_HEADER, font
            )

        image_ops.fill_box(ctx.canvas, lay.footer_box, FOOTER_FILL)
        footer_y = lay.total_height - c.footer_height + c.footer_text_offset

        reference = ctx.metadata.reference_label or cfg.missing_reference
        ref_text = f"{cfg.reference_prefix}: {reference}"
        image_ops.draw_text(ctx.canvas, ref_text, c.padding, footer_y, TEXT_COLOR_FOOTER, font)

        date_text = f"{cfg.created_prefix}: {ctx.metadata.timestamp().strftime(cfg.date_format)}"
        image_ops.draw_text(
            ctx.canvas, date_text,
            text.right_aligned_x(date_text, lay.total_width - c.padding),
            footer_y, TEXT_COLOR_FOOTER, font
        )
        return ctx


class BorderStep(RenderStep):
    """Step 5: Verdict-colored block behind the detail."""

    def __init__(self):
        super().__init__("border")

    def execute(self, ctx: RenderContext) -> RenderContext:
        image_ops.fill_box(ctx.canvas, ctx.layout.detail_area_box, quality_color(ctx.verdict))
        return ctx


class PlaceImagesStep(RenderStep):
    """Steps 6-7: Resize and paste the original and the detail."""

    def __init__(self):
        super().__init__("place_images")

    def execute(self, ctx: RenderContext) -> RenderContext:
        lay = ctx.layout

        original = image_ops.resize_linear(ctx.source.data, lay.scaled_original_size)
        image_ops.paste_image(ctx.canvas, original, lay.original_x, lay.original_y)

        # Inset by the border width so the colored block shows on every side
        detail = image_ops.resize_linear(ctx.detail.data, lay.scaled_detail_size)
        detail_box = lay.detail_box
        image_ops.paste_image(ctx.canvas, detail, int(detail_box.min_x), int(detail_box.min_y))
        return ctx


class OutlineStep(RenderStep):
    """Step 8: Thin gray frame around the original."""

    def __init__(self):
        super().__init__("outline")

    def execute(self, ctx: RenderContext) -> RenderContext:
        image_ops.draw_outline(
            ctx.canvas, ctx.layout.original_box, OUTLINE_COLOR,
            ctx.constants.outline_thickness
        )
        return ctx


class Compositor:
    """Builds the composite documentation image.

    Holds no per-job state, so one instance can serve concurrent jobs.
    """

    def __init__(
        self,
        storage: Storage | None = None,
        config: RenderConfig | None = None,
        events: EventPublisher | None = None,
        constants: LayoutConstants = LAYOUT
    ):
        self._storage = storage or LocalFileStorage()
        self._config = config or RenderConfig()
        self._events = events or SimpleEventPublisher()
        self._constants = constants
        self._pipeline = self._build_pipeline()

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def storage(self) -> Storage:
        return self._storage

    @property
    def events(self) -> EventPublisher:
        return self._events

    def _build_pipeline(self) -> list[RenderStep]:
        """Build render pipeline."""
        return [
            ComputeLayoutStep(),
            CanvasStep(),
            HeaderFooterStep(),
            BorderStep(),
            PlaceImagesStep(),
            OutlineStep(),
        ]

    def render(
        self,
        source: ImageSource,
        detail: ImageSource,
        verdict: Any = QualityVerdict.NEUTRAL,
        metadata: AnnotationMetadata | None = None
    ) -> tuple[PILImage.Image, LayoutResult]:
        """Render the composite in memory.

        Args:
            source: Original photo
            detail: Detail crop; its own pixel size is used, whatever the crop rectangle was
            verdict: QualityVerdict, status code or name
            metadata: Header/footer text

        Returns:
            Tuple of (RGB canvas, layout used)

        Raises:
            MissingSourceFile: If an input path does not exist
            ImageDecodeError: If an input cannot be decoded
            InvalidImageDimensions: If a bitmap has zero size
        """
        ctx = RenderContext(
            source=load_image(source),
            detail=load_image(detail),
            verdict=QualityVerdict.from_code(verdict),
            metadata=metadata or AnnotationMetadata(),
            config=self._config,
            constants=self._constants,
        )
        for step in self._pipeline:
            ctx = step.execute(ctx)
        return ctx.canvas, ctx.layout

    def compose(
        self,
        source: ImageSource,
        detail: ImageSource,
        verdict: Any,
        metadata: AnnotationMetadata | None,
        output_path: Path | str
    ) -> CompositeResult:
        """Render the composite and write it to ``output_path``.

        The file is written once, after the whole render and encode
        succeeded; on failure nothing is left at ``output_path``.

        Returns:
            CompositeResult with the written path and the layout

        Raises:
            MissingSourceFile, ImageDecodeError, InvalidImageDimensions,
            ImageEncodeError, ConfigurationError
        """
        start_time = time.time()
        output_path = Path(output_path)
        verdict = QualityVerdict.from_code(verdict)

        self._events.publish(RenderEvent(
            stage="start",
            message="Rendering composite",
            progress=0.0,
            output_path=output_path
        ))

        try:
            canvas, result_layout = self.render(source, detail, verdict, metadata)
            self._events.publish(RenderEvent(
                stage="encode",
                message=f"Encoding {result_layout.total_width}x{result_layout.total_height} composite",
                progress=0.8,
                output_path=output_path
            ))
            data = image_ops.encode_image(canvas, OUTPUT_FORMAT)
            written = self._storage.write_bytes(output_path, data)
        except ImageEncodeError as e:
            if e.output_path is None:
                e.output_path = str(output_path)
            logger.error(f"Composite render failed: {e}")
            raise
        except InspectionCompositeError as e:
            logger.error(f"Composite render failed: {e}")
            raise

        sidecar = None
        if self._config.write_layout_sidecar:
            sidecar = self._write_sidecar(written, result_layout, verdict, data)
        if sidecar is None:
            self._discard_sidecar(written)

        elapsed = (time.time() - start_time) * 1000
        logger.info(f"Composite written to {written} ({elapsed:.0f} ms)")

        self._events.publish(RenderEvent(
            stage="complete",
            message="Composite complete",
            progress=1.0,
            output_path=written
        ))

        return CompositeResult(
            output_path=written,
            layout=result_layout,
            verdict=verdict,
            sidecar_path=sidecar,
            processing_time_ms=elapsed
        )

    async def compose_async(
        self,
        source: ImageSource,
        detail: ImageSource,
        verdict: Any,
        metadata: AnnotationMetadata | None,
        output_path: Path | str
    ) -> CompositeResult:
        """Run ``compose`` in a worker thread.

        Cancelling the awaiting task does not stop the render; the thread
        finishes and any file it writes is the caller's to clean up.
        """
        return await asyncio.to_thread(
            self.compose, source, detail, verdict, metadata, output_path
        )

    def _write_sidecar(
        self,
        output_path: Path,
        result_layout: LayoutResult,
        verdict: QualityVerdict,
        data: bytes
    ) -> Path | None:
        """Store the exact layout next to the composite for the review screen.

        The composite's digest is saved too, so a sidecar left behind by an
        earlier composite at the same path is never mistaken for this one.
        """
        path = sidecar_path_for(output_path)
        payload = json.dumps(
            {
                "layout": result_layout.to_dict(),
                "verdict": verdict.value,
                "composite_sha256": composite_digest(data),
            },
            sort_keys=True,
            indent=2
        ).encode("utf-8")
        try:
            return self._storage.write_bytes(path, payload)
        except ImageEncodeError as e:
            # The composite itself is complete; the overlay falls back to estimating
            logger.warning(f"Could not write layout sidecar {path}: {e}")
            return None

    def _discard_sidecar(self, output_path: Path) -> None:
        """Remove a sidecar left over from an earlier composite at this path."""
        path = sidecar_path_for(output_path)
        try:
            self._storage.delete(path)
        except OSError as e:
            logger.warning(f"Could not remove stale layout sidecar {path}: {e}")

    def subscribe_to_events(self, callback) -> None:
        """Subscribe to render events."""
        self._events.subscribe(callback)
