from pathlib import Path

import pytest

from promoposter.config.settings import Settings
from promoposter.imaging.style import CompositionStyle, LayoutVariant


class TestCompositionStyle:
    def test_centered_defaults(self) -> None:
        style = CompositionStyle.centered()
        assert style.variant is LayoutVariant.CENTERED
        assert style.font_size_ratio == 0.15
        assert style.min_font_size == 15
        assert style.box_alpha == 153

    def test_left_anchored_variant(self) -> None:
        style = CompositionStyle.for_variant("left")
        assert style.variant is LayoutVariant.LEFT
        assert style.max_width_ratio == 0.4
        assert style.line_height_multiplier == 2.2

    def test_unknown_variant_raises(self) -> None:
        with pytest.raises(ValueError):
            CompositionStyle.for_variant("diagonal")

    def test_from_settings_applies_overrides(self, tmp_path: Path) -> None:
        settings = Settings(storage_root=tmp_path, min_font_size=20, box_opacity=0.5)
        style = CompositionStyle.from_settings(settings)
        assert style.min_font_size == 20
        assert style.box_opacity == 0.5
        assert style.font_size_ratio == 0.15

    def test_explicit_variant_beats_settings(self, tmp_path: Path) -> None:
        settings = Settings(storage_root=tmp_path, layout_variant="centered")
        assert CompositionStyle.from_settings(settings, "left").variant is LayoutVariant.LEFT

    def test_file_suffix_follows_format(self) -> None:
        assert CompositionStyle().file_suffix == ".jpeg"
        assert CompositionStyle(output_format="PNG").file_suffix == ".png"
