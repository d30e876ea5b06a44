from pathlib import Path

from PIL import ImageFont

from promoposter.config.settings import Settings
from promoposter.logging.logger import Log

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontContext:
    """Resolved poster font, registered once at start-up and shared read-only.

    When no font file is configured, or the configured one cannot be loaded,
    Pillow's bundled scalable default font is used. Hangul needs a CJK font
    file (e.g. Noto Sans KR) configured through ``FONT_PATH``.
    """

    def __init__(self, font_path: Path | None = None) -> None:
        self._font_path = self._check_font(font_path)
        self._cache: dict[int, Font] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "FontContext":
        return cls(settings.font_path)

    @property
    def font_path(self) -> Path | None:
        return self._font_path

    def font(self, size: int) -> Font:
        size = max(1, int(size))
        font = self._cache.get(size)
        if font is None:
            if self._font_path is not None:
                font = ImageFont.truetype(str(self._font_path), size)
            else:
                font = ImageFont.load_default(size=size)
            self._cache[size] = font
        return font

    def measure(self, text: str, size: int) -> float:
        """Single-line advance width of ``text`` at ``size`` pixels."""
        return float(self.font(size).getlength(text))

    @staticmethod
    def _check_font(font_path: Path | None) -> Path | None:
        if font_path is None:
            return None
        try:
            ImageFont.truetype(str(font_path), 12)
        except OSError as exc:
            Log.warning(f"Cannot load font {font_path} ({exc}); using the default font")
            return None
        return font_path
