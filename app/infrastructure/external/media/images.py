"""Image optimisation for uploaded pictures (Pillow)."""

from __future__ import annotations

import asyncio
import io

from PIL import Image, UnidentifiedImageError

from app.domain.exceptions import ValidationException

WEBP_CONTENT_TYPE = "image/webp"


def _to_webp(data: bytes, max_width: int, quality: int) -> bytes:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationException("Uploaded file is not a valid image", "image") from e

    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
    if img.width > max_width:
        height = max(1, round(img.height * max_width / img.width))
        img = img.resize((max_width, height), Image.LANCZOS)

    buf = io.BytesIO()
    img.save(buf, format="WEBP", quality=quality)
    return buf.getvalue()


async def optimize_image(data: bytes, max_width: int = 800, quality: int = 80) -> bytes:
    """Resize to at most max_width (aspect ratio kept) and re-encode as WebP.

    Raises:
        ValidationException: If data is not a readable image.
    """
    return await asyncio.to_thread(_to_webp, data, max_width, quality)
