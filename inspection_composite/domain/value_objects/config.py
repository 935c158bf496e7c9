"""Configuration value objects with validation."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ...config import (
    CREATED_PREFIX,
    DATE_FORMAT,
    DEFAULT_CHAR_WIDTH,
    DEFAULT_FONT_SIZE,
    ENV_PREFIX,
    MISSING_REFERENCE,
    REFERENCE_PREFIX,
)
from ...exceptions import ConfigurationError


class QualityVerdict(str, Enum):
    """Inspection outcome; drives the detail border color."""
    GOOD = "good"
    BAD = "bad"
    NEUTRAL = "neutral"

    @classmethod
    def from_code(cls, code: Any) -> QualityVerdict:
        """Map a status code or name to a verdict.

        Accepts the numeric status codes used by the inspection forms
        (4 = good, 5 = bad, 6 = neutral), verdict names in any case, or a
        QualityVerdict. Anything else maps to NEUTRAL.
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, bool):
            return cls.NEUTRAL
        if isinstance(code, int):
            return _STATUS_CODES.get(code, cls.NEUTRAL)
        if isinstance(code, str):
            value = code.strip().lower()
            if value.isdigit():
                return _STATUS_CODES.get(int(value), cls.NEUTRAL)
            try:
                return cls(value)
            except ValueError:
                return cls.NEUTRAL
        return cls.NEUTRAL


_STATUS_CODES: dict[int, QualityVerdict] = {
    4: QualityVerdict.GOOD,
    5: QualityVerdict.BAD,
    6: QualityVerdict.NEUTRAL,
}


class RenderConfig(BaseModel):
    """Rendering options for the compositor and overlay."""

    model_config = {"frozen": True}

    # Text
    font_path: Path | None = None
    font_size: int = Field(default=DEFAULT_FONT_SIZE, ge=6, le=96)
    char_width: int = Field(default=DEFAULT_CHAR_WIDTH, ge=1, le=64)

    # Footer strings
    date_format: str = DATE_FORMAT
    reference_prefix: str = REFERENCE_PREFIX
    created_prefix: str = CREATED_PREFIX
    missing_reference: str = MISSING_REFERENCE

    # Output
    write_layout_sidecar: bool = True

    # Parallel jobs
    max_workers: int = Field(default=4, ge=1, le=32)

    @field_validator('font_path')
    @classmethod
    def validate_font_path(cls, v: Path | None) -> Path | None:
        """Font file must exist when given."""
        if v is not None and not v.is_file():
            raise ValueError(f"font file not found: {v}")
        return v

    @field_validator('date_format')
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        if '%' not in v:
            raise ValueError("date_format must contain at least one strftime directive")
        return v

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> RenderConfig:
        """Build config from ``INSPECTION_COMPOSITE_*`` environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in env:
                values[name] = env[key]
        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            field = str(first['loc'][0]) if first.get('loc') else None
            raise ConfigurationError(
                f"Invalid environment configuration: {first['msg']}",
                config_key=f"{ENV_PREFIX}{field.upper()}" if field else None
            ) from e


__all__ = [
    'QualityVerdict',
    'RenderConfig',
]
