from dataclasses import dataclass, replace
from enum import Enum

from promoposter.config.settings import Settings

RGBA = tuple[int, int, int, int]


class LayoutVariant(str, Enum):
    CENTERED = "centered"
    LEFT = "left"


@dataclass(frozen=True)
class CompositionStyle:
    """Named layout constants for one poster variant.

    Ratios are fractions of the canvas: ``font_size_ratio`` and
    ``box_height_ratio`` of its height, ``max_width_ratio``, ``box_width_ratio``
    and ``margin_ratio`` of its width.
    """

    variant: LayoutVariant = LayoutVariant.CENTERED
    font_size_ratio: float = 0.15
    min_font_size: int = 15
    max_width_ratio: float = 0.8
    line_height_multiplier: float = 1.3
    vertical_bias_ratio: float = 0.05
    margin_ratio: float = 0.05
    box_opacity: float = 0.6
    box_width_ratio: float = 0.9
    box_height_ratio: float = 0.6
    box_padding: int = 20
    box_color: tuple[int, int, int] = (0, 0, 0)
    text_color: RGBA = (255, 255, 255, 255)
    stroke_color: RGBA = (0, 0, 0, 255)
    stroke_width: int = 3
    shadow_color: RGBA = (0, 0, 0, 160)
    shadow_offset: tuple[int, int] = (4, 4)
    draw_outline: bool = True
    output_format: str = "JPEG"
    quality: int = 90

    @classmethod
    def centered(cls) -> "CompositionStyle":
        return cls()

    @classmethod
    def left_anchored(cls) -> "CompositionStyle":
        return cls(
            variant=LayoutVariant.LEFT,
            max_width_ratio=0.4,
            line_height_multiplier=2.2,
            box_opacity=0.7,
            box_padding=10,
            stroke_width=2,
            shadow_offset=(3, 3),
        )

    @classmethod
    def for_variant(cls, variant: LayoutVariant | str) -> "CompositionStyle":
        if LayoutVariant(variant) is LayoutVariant.LEFT:
            return cls.left_anchored()
        return cls.centered()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        variant: LayoutVariant | str | None = None,
    ) -> "CompositionStyle":
        style = cls.for_variant(variant or settings.layout_variant)
        overrides = {
            "font_size_ratio": settings.font_size_ratio,
            "min_font_size": settings.min_font_size,
            "max_width_ratio": settings.max_width_ratio,
            "line_height_multiplier": settings.line_height_multiplier,
            "box_opacity": settings.box_opacity,
            "quality": settings.poster_quality,
        }
        return replace(style, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def box_alpha(self) -> int:
        return round(255 * max(0.0, min(1.0, self.box_opacity)))

    @property
    def file_suffix(self) -> str:
        return ".png" if self.output_format.upper() == "PNG" else ".jpeg"
