import io

from PIL import Image, UnidentifiedImageError


def reencode_jpeg(data: bytes, quality: int) -> bytes:
    """Decode any Pillow-readable raster and re-encode it as baseline JPEG.

    Raises:
        ValueError: if ``data`` is not a decodable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            rgb = image.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Not a decodable image: {exc}") from exc

    buffer = io.BytesIO()
    rgb.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
