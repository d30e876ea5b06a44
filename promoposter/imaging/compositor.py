import io
from pathlib import Path

from PIL import Image, ImageDraw, UnidentifiedImageError

from promoposter.imaging.exceptions import CompositionError
from promoposter.imaging.fonts import FontContext
from promoposter.imaging.layout import TextLayout, compute_layout
from promoposter.imaging.style import CompositionStyle, LayoutVariant
from promoposter.logging.logger import Log


class Compositor:
    """Overlays auto-fitted, wrapped text on a background raster."""

    def __init__(self, fonts: FontContext, style: CompositionStyle | None = None) -> None:
        self._fonts = fonts
        self._style = style or CompositionStyle.centered()

    @property
    def style(self) -> CompositionStyle:
        return self._style

    def layout(
        self,
        canvas_size: tuple[int, int],
        text: str,
        style: CompositionStyle | None = None,
    ) -> TextLayout:
        return compute_layout(text, canvas_size, style or self._style, self._fonts.measure)

    def compose(
        self,
        background: bytes | Path,
        text: str,
        style: CompositionStyle | None = None,
    ) -> bytes:
        """Render ``text`` over ``background`` and return the encoded poster.

        Raises:
            CompositionError: if the background cannot be decoded or the
                canvas cannot be allocated or encoded.
        """
        style = style or self._style
        base = self._load_background(background)
        try:
            canvas = Image.new("RGBA", base.size)
            canvas.paste(base, (0, 0))
        except (ValueError, MemoryError) as exc:
            raise CompositionError(f"Cannot allocate a {base.size} canvas: {exc}") from exc

        layout = self.layout(canvas.size, text, style)
        Log.debug(
            f"Poster layout: {len(layout.lines)} lines at {layout.font_size}px "
            f"(max width {layout.max_width:.0f}px)"
        )
        if layout.lines:
            canvas = Image.alpha_composite(canvas, self._box_layer(canvas.size, layout, style))
            canvas = Image.alpha_composite(canvas, self._text_layer(canvas.size, layout, style))
        return self._encode(canvas, style)

    @staticmethod
    def _load_background(background: bytes | Path) -> Image.Image:
        source = io.BytesIO(background) if isinstance(background, bytes) else background
        try:
            with Image.open(source) as image:
                return image.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise CompositionError(f"Cannot decode background image: {exc}") from exc

    @staticmethod
    def _box_layer(
        size: tuple[int, int],
        layout: TextLayout,
        style: CompositionStyle,
    ) -> Image.Image:
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        fill = (*style.box_color, style.box_alpha)
        width, height = size
        pad = style.box_padding

        if style.variant is LayoutVariant.CENTERED:
            box_w = width * style.box_width_ratio
            box_h = max(height * style.box_height_ratio, layout.block_height + 2 * pad)
            center_y = layout.origin_y + layout.block_height / 2
            top = max(0.0, center_y - box_h / 2)
            bottom = min(float(height), center_y + box_h / 2)
            draw.rectangle(((width - box_w) / 2, top, (width + box_w) / 2, bottom), fill=fill)
        else:
            positions = layout.line_positions(width, style.variant)
            for (x, y), line_width in zip(positions, layout.line_widths):
                draw.rectangle(
                    (x - pad, y - pad, x + line_width + pad, y + layout.font_size + pad),
                    fill=fill,
                )
        return layer

    def _text_layer(
        self,
        size: tuple[int, int],
        layout: TextLayout,
        style: CompositionStyle,
    ) -> Image.Image:
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        font = self._fonts.font(layout.font_size)
        dx, dy = style.shadow_offset

        positions = layout.line_positions(size[0], style.variant)
        for (x, y), line in zip(positions, layout.lines):
            if style.draw_outline:
                draw.text((x + dx, y + dy), line, font=font, fill=style.shadow_color)
                draw.text(
                    (x, y),
                    line,
                    font=font,
                    fill=style.text_color,
                    stroke_width=style.stroke_width,
                    stroke_fill=style.stroke_color,
                )
            else:
                draw.text((x, y), line, font=font, fill=style.text_color)
        return layer

    @staticmethod
    def _encode(canvas: Image.Image, style: CompositionStyle) -> bytes:
        buffer = io.BytesIO()
        image_format = style.output_format.upper()
        try:
            if image_format in {"JPEG", "JPG"}:
                canvas.convert("RGB").save(buffer, format="JPEG", quality=style.quality)
            else:
                canvas.save(buffer, format=image_format)
        except (OSError, ValueError, KeyError) as exc:
            raise CompositionError(f"Cannot encode poster as {image_format}: {exc}") from exc
        return buffer.getvalue()
