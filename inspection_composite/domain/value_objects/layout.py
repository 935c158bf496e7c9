"""Layout result - the computed geometry of one composite."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

from .geometry import BoundingBox


@dataclass(frozen=True, slots=True)
class LayoutResult:
    """Canvas size and every sub-rectangle placement of a composite.

    Derived purely from the two input sizes and the layout constants, so it
    can be recomputed anywhere the same inputs are known.
    """
    source_width: int
    source_height: int
    detail_width: int
    detail_height: int
    border_width: int
    header_height: int
    footer_height: int

    scale_original: float
    scale_detail: float
    scaled_original_width: int
    scaled_original_height: int
    scaled_detail_width: int
    scaled_detail_height: int

    total_width: int
    total_height: int
    original_x: int
    original_y: int
    detail_area_x: int
    detail_area_y: int

    @property
    def size(self) -> tuple[int, int]:
        return (self.total_width, self.total_height)

    @property
    def scaled_original_size(self) -> tuple[int, int]:
        return (self.scaled_original_width, self.scaled_original_height)

    @property
    def scaled_detail_size(self) -> tuple[int, int]:
        return (self.scaled_detail_width, self.scaled_detail_height)

    @property
    def header_box(self) -> BoundingBox:
        return BoundingBox(0, 0, self.total_width, self.header_height)

    @property
    def footer_box(self) -> BoundingBox:
        return BoundingBox(
            0, self.total_height - self.footer_height,
            self.total_width, self.total_height
        )

    @property
    def original_box(self) -> BoundingBox:
        return BoundingBox.from_xywh(
            self.original_x, self.original_y,
            self.scaled_original_width, self.scaled_original_height
        )

    @property
    def detail_area_box(self) -> BoundingBox:
        """Outer edge of the colored border around the detail."""
        return BoundingBox.from_xywh(
            self.detail_area_x, self.detail_area_y,
            self.scaled_detail_width + self.border_width * 2,
            self.scaled_detail_height + self.border_width * 2
        )

    @property
    def detail_box(self) -> BoundingBox:
        """Where the resized detail bitmap is pasted."""
        return self.detail_area_box.expand(-self.border_width)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> LayoutResult:
        """Rebuild from ``to_dict`` output; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})
