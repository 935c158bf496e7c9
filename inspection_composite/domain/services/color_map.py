"""Verdict to border color lookup."""

from __future__ import annotations

from typing import Any

from ...config import COLOR_BAD, COLOR_GOOD, COLOR_NEUTRAL
from ..value_objects.config import QualityVerdict

QUALITY_COLORS: dict[QualityVerdict, tuple[int, int, int]] = {
    QualityVerdict.GOOD: COLOR_GOOD,
    QualityVerdict.BAD: COLOR_BAD,
    QualityVerdict.NEUTRAL: COLOR_NEUTRAL,
}


def quality_color(verdict: Any) -> tuple[int, int, int]:
    """Return the RGB border color for a verdict.

    Total: status codes and names go through ``QualityVerdict.from_code``;
    anything unrecognized gets the neutral color.
    """
    return QUALITY_COLORS.get(QualityVerdict.from_code(verdict), COLOR_NEUTRAL)
