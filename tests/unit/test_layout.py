"""Layout tests with a fixed-advance measure: every character is ``size * 0.5`` px wide."""

import pytest

from promoposter.imaging.layout import compute_layout, fit_font_size, wrap_text
from promoposter.imaging.style import CompositionStyle, LayoutVariant


def measure(text: str, size: int) -> float:
    return len(text) * size * 0.5


class TestFitFontSize:
    def test_keeps_initial_size_when_text_fits(self) -> None:
        assert fit_font_size("short", measure, initial=45, floor=15, max_width=800) == 45

    def test_shrinks_until_text_fits(self) -> None:
        # 20 chars * size * 0.5 <= 200  ->  size <= 20
        assert fit_font_size("x" * 20, measure, initial=45, floor=15, max_width=200) == 20

    def test_stops_at_floor(self) -> None:
        assert fit_font_size("x" * 500, measure, initial=45, floor=15, max_width=100) == 15

    def test_initial_below_floor_is_left_alone(self) -> None:
        assert fit_font_size("x" * 500, measure, initial=10, floor=15, max_width=100) == 10

    def test_shrinks_one_pixel_at_a_time(self) -> None:
        sizes: list[int] = []

        def recording(text: str, size: int) -> float:
            sizes.append(size)
            return measure(text, size)

        fit_font_size("x" * 20, recording, initial=25, floor=15, max_width=200)
        assert sizes == [25, 24, 23, 22, 21, 20]


class TestWrapText:
    def test_every_line_fits(self) -> None:
        text = "spring flea market in the city park this saturday morning"
        lines = wrap_text(text, 10, measure, max_width=100)
        assert all(measure(line, 10) <= 100 for line in lines)
        assert " ".join(lines) == text

    def test_greedy_packing(self) -> None:
        # 20 chars per line at size 10
        assert wrap_text("aaaa bbbb cccc dddd eeee", 10, measure, 100) == [
            "aaaa bbbb cccc dddd",
            "eeee",
        ]

    def test_oversized_word_gets_its_own_line(self) -> None:
        lines = wrap_text("hi supercalifragilistic yo", 10, measure, 50)
        assert lines == ["hi", "supercalifragilistic", "yo"]

    def test_empty_text_has_no_lines(self) -> None:
        assert wrap_text("   ", 10, measure, 100) == []

    def test_newlines_are_word_separators(self) -> None:
        assert wrap_text("a\nb", 10, measure, 100) == ["a b"]


class TestComputeLayout:
    def test_initial_size_from_canvas_height(self) -> None:
        layout = compute_layout("hi", (1000, 300), CompositionStyle.centered(), measure)
        assert layout.font_size == 45

    def test_long_text_shrinks_to_floor_and_wraps(self) -> None:
        text = " ".join(["word"] * 200)
        layout = compute_layout(text, (400, 300), CompositionStyle.centered(), measure)
        assert layout.font_size == 15
        assert len(layout.lines) > 1
        assert all(width <= layout.max_width for width in layout.line_widths)

    def test_centered_lines_are_horizontally_centered(self) -> None:
        layout = compute_layout("abc de", (1000, 400), CompositionStyle.centered(), measure)
        for (x, _), width in zip(layout.line_positions(1000, LayoutVariant.CENTERED), layout.line_widths):
            assert x == pytest.approx((1000 - width) / 2)

    def test_centered_block_sits_above_center(self) -> None:
        layout = compute_layout("abc", (1000, 400), CompositionStyle.centered(), measure)
        assert layout.origin_y == pytest.approx((400 - layout.block_height) / 2 - 400 * 0.05)

    def test_centered_block_never_starts_above_canvas(self) -> None:
        text = " ".join(["word"] * 400)
        layout = compute_layout(text, (400, 100), CompositionStyle.centered(), measure)
        assert layout.origin_y == 0

    def test_left_variant_uses_margins(self) -> None:
        style = CompositionStyle.left_anchored()
        layout = compute_layout("abc de", (1000, 400), style, measure)
        assert (layout.origin_x, layout.origin_y) == (50, 20)
        assert layout.max_width == pytest.approx(400)
        assert all(x == 50 for x, _ in layout.line_positions(1000, LayoutVariant.LEFT))

    def test_line_height_multiplier(self) -> None:
        layout = compute_layout("a b", (1000, 400), CompositionStyle.centered(), measure)
        assert layout.line_height == pytest.approx(layout.font_size * 1.3)


class TestWrapProperties:
    TEXTS = [
        "행사 제목 날짜 정보 장소 정보",
        "spring flea market in the city park this saturday morning",
        "a bb ccc dddd eeeee ffffff ggggggg hhhhhhhh",
        "hi supercalifragilisticexpialidocious yo",
    ]

    @pytest.mark.parametrize("text", TEXTS)
    def test_rewrapping_wrapped_lines_is_stable(self, text: str) -> None:
        lines = wrap_text(text, 10, measure, 100)
        rewrapped = [piece for line in lines for piece in wrap_text(line, 10, measure, 100)]
        assert rewrapped == lines

    def test_event_poster_scenario(self) -> None:
        style = CompositionStyle.centered()
        layout = compute_layout("행사 제목\n날짜 정보\n장소 정보", (1024, 1024), style, measure)
        assert 1 <= len(layout.lines) <= 3
        assert all(width <= 1024 * 0.8 for width in layout.line_widths)
        assert layout.font_size <= int(1024 * 0.15)

    def test_empty_text_layout(self) -> None:
        layout = compute_layout("", (1024, 768), CompositionStyle.centered(), measure)
        assert layout.lines == ()
        assert layout.block_height == 0
