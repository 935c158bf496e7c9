"""Tests for the review-screen arrow overlay."""

from pathlib import Path

import numpy as np
import pytest

from ..application.ports.storage import MemoryStorage
from ..application.services.arrow_overlay import (
    ArrowOverlayRenderer,
    OverlayInputs,
    load_layout_sidecar,
)
from ..application.services.compositor import Compositor, sidecar_path_for
from ..domain.entities.image import Image
from ..domain.services.color_map import quality_color
from ..domain.services.layout_engine import estimated_detail_size, layout
from ..domain.value_objects.config import QualityVerdict, RenderConfig
from ..domain.value_objects.geometry import CropRegion
from ..exceptions import ImageDecodeError, MissingSourceFile

CROP = CropRegion(500, 300, 200, 200)


@pytest.fixture
def composite_file(tmp_path, source_image, detail_image):
    out = tmp_path / "composite.png"
    Compositor().compose(source_image, detail_image, QualityVerdict.BAD, None, out)
    return out


@pytest.fixture
def ready_inputs(source_file, composite_file) -> OverlayInputs:
    inputs = OverlayInputs(crop=CROP, verdict=QualityVerdict.BAD)
    inputs.load_source(source_file)
    inputs.load_composite(composite_file)
    return inputs


class TestReadiness:
    """Nothing is drawn until every input is present."""

    def test_empty_inputs(self):
        renderer = ArrowOverlayRenderer()
        assert not OverlayInputs().ready
        assert renderer.render(OverlayInputs()) is None
        assert renderer.geometry(OverlayInputs()) is None

    def test_source_only(self, source_file):
        inputs = OverlayInputs(crop=CROP)
        inputs.load_source(source_file)
        assert not inputs.ready
        assert ArrowOverlayRenderer().render(inputs) is None

    def test_composite_only(self, composite_file):
        inputs = OverlayInputs(crop=CROP)
        inputs.load_composite(composite_file)
        assert not inputs.ready
        assert ArrowOverlayRenderer().preview(inputs) is None

    def test_missing_crop(self, ready_inputs):
        ready_inputs.crop = None
        assert ArrowOverlayRenderer().render(ready_inputs) is None

    def test_ready(self, ready_inputs):
        assert ready_inputs.ready


class TestLayoutResolution:
    """Exact layout from the sidecar, else the estimate."""

    def test_uses_sidecar_layout(self, ready_inputs, source_image, detail_image):
        expected = layout(source_image.width, source_image.height,
                          detail_image.width, detail_image.height)
        assert ready_inputs.exact_layout == expected
        assert ArrowOverlayRenderer().resolve_layout(ready_inputs) == expected

    def test_estimate_without_sidecar(self, tmp_path, source_image, detail_image, source_file):
        out = tmp_path / "plain.png"
        Compositor(config=RenderConfig(write_layout_sidecar=False)).compose(
            source_image, detail_image, QualityVerdict.GOOD, None, out
        )
        inputs = OverlayInputs(crop=CROP)
        inputs.load_source(source_file)
        inputs.load_composite(out)
        assert inputs.exact_layout is None
        resolved = ArrowOverlayRenderer().resolve_layout(inputs)
        assert resolved == layout(1200, 800, *estimated_detail_size())

    def test_mismatched_sidecar_falls_back(self, ready_inputs):
        ready_inputs.exact_layout = layout(1000, 1000, 400, 300)
        resolved = ArrowOverlayRenderer().resolve_layout(ready_inputs)
        assert resolved == layout(1200, 800, *estimated_detail_size())

    def test_stale_sidecar_from_earlier_composite_is_not_used(self, tmp_path):
        tall = Image.from_array(np.full((1200, 300, 3), 90, dtype=np.uint8))
        short_detail = Image.from_array(np.zeros((100, 434, 3), dtype=np.uint8))
        taller_detail = Image.from_array(np.zeros((300, 434, 3), dtype=np.uint8))
        out = tmp_path / "composite.png"
        first = Compositor().compose(tall, short_detail, QualityVerdict.GOOD, None, out)
        Compositor(config=RenderConfig(write_layout_sidecar=False)).compose(
            tall, taller_detail, QualityVerdict.GOOD, None, out
        )

        inputs = OverlayInputs(crop=CROP, source=tall)
        inputs.load_composite(out)
        assert inputs.exact_layout is None
        resolved = ArrowOverlayRenderer().resolve_layout(inputs)
        assert resolved != first.layout
        assert resolved == layout(300, 1200, *estimated_detail_size())

    def test_sidecar_for_other_bytes_is_ignored(self, tmp_path, source_image, detail_image, source_file):
        out = tmp_path / "composite.png"
        other = tmp_path / "other.png"
        Compositor().compose(source_image, detail_image, QualityVerdict.BAD, None, out)
        Compositor().compose(source_image, detail_image, QualityVerdict.GOOD, None, other)
        # Same canvas size, different pixels, old sidecar still in place
        out.write_bytes(other.read_bytes())

        inputs = OverlayInputs(crop=CROP)
        inputs.load_source(source_file)
        inputs.load_composite(out)
        assert inputs.exact_layout is None

    def test_malformed_sidecar_is_ignored(self, composite_file):
        sidecar_path_for(composite_file).write_text("{not json", encoding="utf-8")
        assert load_layout_sidecar(composite_file) is None

    def test_sidecar_without_layout_key(self, composite_file):
        sidecar_path_for(composite_file).write_text('{"verdict": "bad"}', encoding="utf-8")
        assert load_layout_sidecar(composite_file) is None

    def test_no_sidecar(self, tmp_path):
        assert load_layout_sidecar(tmp_path / "missing.png") is None


class TestStorageReads:
    """Overlay inputs come through the storage port."""

    def test_memory_storage_reuses_exact_layout(self, source_image, detail_image, source_file):
        storage = MemoryStorage()
        source_path = Path("review/source.png")
        storage.write_bytes(source_path, source_file.read_bytes())
        result = Compositor(storage=storage).compose(
            source_image, detail_image, QualityVerdict.BAD, None, Path("review/composite.png")
        )

        inputs = OverlayInputs(crop=CROP, verdict=QualityVerdict.BAD, storage=storage)
        inputs.load_source(source_path)
        inputs.load_composite(result.output_path)
        assert inputs.exact_layout == result.layout
        assert ArrowOverlayRenderer().render(inputs).size == result.layout.size

    def test_missing_in_storage(self):
        inputs = OverlayInputs(storage=MemoryStorage())
        with pytest.raises(MissingSourceFile):
            inputs.load_composite(Path("nowhere.png"))

    def test_undecodable_in_storage(self):
        storage = MemoryStorage()
        storage.write_bytes(Path("bad.png"), b"not an image")
        inputs = OverlayInputs(storage=storage)
        with pytest.raises(ImageDecodeError):
            inputs.load_source(Path("bad.png"))


class TestRender:
    """The RGBA arrow layer."""

    def test_layer_matches_composite(self, ready_inputs):
        layer = ArrowOverlayRenderer().render(ready_inputs)
        assert layer.mode == "RGBA"
        assert layer.size == ready_inputs.composite.size

    def test_layer_is_transparent_away_from_arrow(self, ready_inputs):
        layer = ArrowOverlayRenderer().render(ready_inputs)
        assert layer.getpixel((0, 0))[3] == 0
        assert layer.getpixel((layer.width - 1, layer.height - 1))[3] == 0

    def test_arrow_drawn_in_verdict_color(self, ready_inputs):
        renderer = ArrowOverlayRenderer()
        geom = renderer.geometry(ready_inputs)
        layer = renderer.render(ready_inputs)
        mid = (geom.start + geom.end) * 0.5
        assert layer.getpixel((round(mid.x), round(mid.y))) == quality_color(QualityVerdict.BAD) + (255,)

    def test_arrowhead_tip_is_painted(self, ready_inputs):
        renderer = ArrowOverlayRenderer()
        geom = renderer.geometry(ready_inputs)
        layer = renderer.render(ready_inputs)
        # Just behind the tip along the arrow direction
        inside = geom.end - (geom.end - geom.start) * (4.0 / geom.length)
        assert layer.getpixel((round(inside.x), round(inside.y)))[3] == 255

    def test_arrow_ends_on_detail_border(self, ready_inputs):
        geom = ArrowOverlayRenderer().geometry(ready_inputs)
        border = ready_inputs.exact_layout.detail_area_box
        assert geom.end.x == border.min_x
        assert border.min_y <= geom.end.y <= border.max_y

    def test_preview_blends_over_composite(self, ready_inputs):
        preview = ArrowOverlayRenderer().preview(ready_inputs)
        assert preview.size == ready_inputs.composite.size
        assert preview.mode == "RGBA"
        assert preview.getpixel((0, 0))[:3] == ready_inputs.composite.data.getpixel((0, 0))[:3]


class TestCache:
    """Repaint only when inputs change."""

    def test_same_inputs_reuse_layer(self, ready_inputs):
        renderer = ArrowOverlayRenderer()
        assert renderer.render(ready_inputs) is renderer.render(ready_inputs)

    def test_new_crop_repaints(self, ready_inputs):
        renderer = ArrowOverlayRenderer()
        first = renderer.render(ready_inputs)
        ready_inputs.crop = CropRegion(100, 100, 50, 50)
        assert renderer.render(ready_inputs) is not first

    def test_new_verdict_repaints(self, ready_inputs):
        renderer = ArrowOverlayRenderer()
        first = renderer.render(ready_inputs)
        ready_inputs.verdict = QualityVerdict.GOOD
        assert renderer.render(ready_inputs) is not first

    def test_reloaded_image_repaints(self, ready_inputs, source_file):
        renderer = ArrowOverlayRenderer()
        first = renderer.render(ready_inputs)
        ready_inputs.source = Image.from_file(source_file)
        assert renderer.render(ready_inputs) is not first

    def test_invalidate(self, ready_inputs):
        renderer = ArrowOverlayRenderer()
        first = renderer.render(ready_inputs)
        renderer.invalidate()
        second = renderer.render(ready_inputs)
        assert second is not first
        assert second.tobytes() == first.tobytes()
