"""Font fitting, greedy wrapping and block placement.

All functions are pure: width measurement is injected as ``measure(text, size)``
so the same code drives real fonts and deterministic test doubles.
"""

from collections.abc import Callable
from dataclasses import dataclass

from promoposter.imaging.style import CompositionStyle, LayoutVariant

Measure = Callable[[str, int], float]


@dataclass(frozen=True)
class TextLayout:
    font_size: int
    lines: tuple[str, ...]
    line_widths: tuple[float, ...]
    line_height: float
    origin_x: float
    origin_y: float
    max_width: float

    @property
    def block_height(self) -> float:
        return len(self.lines) * self.line_height

    def line_positions(self, canvas_width: int, variant: LayoutVariant) -> list[tuple[float, float]]:
        """Top-left corner of every line."""
        positions = []
        for index, width in enumerate(self.line_widths):
            if variant is LayoutVariant.CENTERED:
                x = (canvas_width - width) / 2
            else:
                x = self.origin_x
            positions.append((x, self.origin_y + index * self.line_height))
        return positions


def fit_font_size(
    text: str,
    measure: Measure,
    *,
    initial: int,
    floor: int,
    max_width: float,
) -> int:
    """Shrink the font one pixel at a time until the unwrapped text fits.

    Stops at ``floor``; runs at most ``initial - floor`` iterations and leaves
    ``initial`` untouched when the text already fits.
    """
    unwrapped = " ".join(text.split())
    size = initial
    while size > floor and measure(unwrapped, size) > max_width:
        size -= 1
    return size


def wrap_text(text: str, size: int, measure: Measure, max_width: float) -> list[str]:
    """Greedy word wrap. Words are never split; an oversized word gets its own line."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if not current or measure(candidate, size) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def compute_layout(
    text: str,
    canvas_size: tuple[int, int],
    style: CompositionStyle,
    measure: Measure,
) -> TextLayout:
    width, height = canvas_size
    max_width = width * style.max_width_ratio
    initial = max(1, int(height * style.font_size_ratio))
    size = fit_font_size(
        text,
        measure,
        initial=initial,
        floor=style.min_font_size,
        max_width=max_width,
    )
    lines = wrap_text(text, size, measure, max_width)
    line_height = size * style.line_height_multiplier
    block_height = len(lines) * line_height

    if style.variant is LayoutVariant.CENTERED:
        origin_x = (width - max_width) / 2
        origin_y = max(0.0, (height - block_height) / 2 - height * style.vertical_bias_ratio)
    else:
        origin_x = width * style.margin_ratio
        origin_y = height * style.margin_ratio

    return TextLayout(
        font_size=size,
        lines=tuple(lines),
        line_widths=tuple(measure(line, size) for line in lines),
        line_height=line_height,
        origin_x=origin_x,
        origin_y=origin_y,
        max_width=max_width,
    )
