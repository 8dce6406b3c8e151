"""
Pillow codec: read dimensions, then extract, resize and encode JPEG.
"""

from io import BytesIO

from PIL import Image, ImageOps, UnidentifiedImageError

from ..models.crop import CropRect, ImageDimensions
from .errors import DecodeError, EncodeError


def read_dimensions(data: bytes) -> ImageDimensions:
    """Header-only read; raises DecodeError when the size is unreadable."""
    if not data:
        raise DecodeError("Empty image body")
    try:
        with Image.open(BytesIO(data)) as im:
            width, height = im.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Could not read image dimensions: {exc}") from exc
    if width <= 0 or height <= 0:
        raise DecodeError("Could not read image dimensions")
    return ImageDimensions(width=width, height=height)


def extract_resize_encode(data: bytes, rect: CropRect, out_w: int, out_h: int, quality: int) -> bytes:
    """
    Cut `rect` out of the source, cover-fit it to out_w x out_h and encode JPEG.

    Raises:
        EncodeError: on any codec failure
    """
    try:
        with Image.open(BytesIO(data)) as im:
            region = im.crop(rect.box()).convert("RGB")
        fitted = ImageOps.fit(region, (out_w, out_h), method=Image.Resampling.LANCZOS)
        out = BytesIO()
        fitted.save(out, "JPEG", quality=quality, optimize=True, progressive=True)
        return out.getvalue()
    except (Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise EncodeError(f"Failed to encode image: {exc}") from exc
