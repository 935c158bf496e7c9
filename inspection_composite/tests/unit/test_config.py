"""Unit tests for configuration value objects."""

import pytest
from pydantic import ValidationError

from inspection_composite.domain.value_objects.config import QualityVerdict, RenderConfig
from inspection_composite.exceptions import ConfigurationError


class TestRenderConfig:
    """Tests for RenderConfig."""

    def test_default_values(self):
        config = RenderConfig()
        assert config.font_path is None
        assert config.font_size == 24
        assert config.char_width == 12
        assert config.date_format == "%d/%m/%Y"
        assert config.reference_prefix == "Ref"
        assert config.created_prefix == "Created"
        assert config.missing_reference == "N/A"
        assert config.write_layout_sidecar is True

    def test_custom_values(self):
        config = RenderConfig(reference_prefix="Réf", created_prefix="Créée", font_size=18)
        assert config.reference_prefix == "Réf"
        assert config.font_size == 18

    def test_frozen(self):
        config = RenderConfig()
        with pytest.raises(ValidationError):
            config.font_size = 30

    def test_validation_font_size_range(self):
        with pytest.raises(ValidationError):
            RenderConfig(font_size=2)

    def test_validation_missing_font_file(self, tmp_path):
        with pytest.raises(ValidationError):
            RenderConfig(font_path=tmp_path / "nope.ttf")

    def test_validation_date_format(self):
        with pytest.raises(ValidationError):
            RenderConfig(date_format="no directives")


class TestRenderConfigFromEnv:
    """Tests for environment-driven config."""

    def test_empty_environment_gives_defaults(self):
        assert RenderConfig.from_env({}) == RenderConfig()

    def test_reads_prefixed_variables(self):
        config = RenderConfig.from_env({
            "INSPECTION_COMPOSITE_FONT_SIZE": "20",
            "INSPECTION_COMPOSITE_WRITE_LAYOUT_SIDECAR": "false",
            "INSPECTION_COMPOSITE_REFERENCE_PREFIX": "Réf",
            "UNRELATED": "x",
        })
        assert config.font_size == 20
        assert config.write_layout_sidecar is False
        assert config.reference_prefix == "Réf"

    def test_invalid_value_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            RenderConfig.from_env({"INSPECTION_COMPOSITE_MAX_WORKERS": "0"})
        assert exc_info.value.config_key == "INSPECTION_COMPOSITE_MAX_WORKERS"
        assert "CONFIG_ERROR" in str(exc_info.value)


class TestQualityVerdict:
    """Tests for QualityVerdict."""

    def test_string_values(self):
        assert QualityVerdict.GOOD.value == "good"
        assert QualityVerdict.BAD.value == "bad"
        assert QualityVerdict.NEUTRAL.value == "neutral"

    @pytest.mark.parametrize("code, expected", [
        (4, QualityVerdict.GOOD),
        (5, QualityVerdict.BAD),
        (6, QualityVerdict.NEUTRAL),
        ("4", QualityVerdict.GOOD),
        ("Good", QualityVerdict.GOOD),
        (" BAD ", QualityVerdict.BAD),
        (QualityVerdict.BAD, QualityVerdict.BAD),
    ])
    def test_from_code(self, code, expected):
        assert QualityVerdict.from_code(code) is expected

    @pytest.mark.parametrize("code", [0, 7, -1, "excellent", None, 4.0, True, object()])
    def test_unknown_maps_to_neutral(self, code):
        assert QualityVerdict.from_code(code) is QualityVerdict.NEUTRAL
