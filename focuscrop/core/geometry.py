"""
Crop geometry: where to cut the source image.

Crop strategy:
- We output fixed width/height (defaults 700x700)
- We "zoom in" by taking a smaller crop region than original, then resizing up
- We shift the crop window left or right to bias focus
- cut_percent controls how much of the free horizontal space is used for that shift
"""

import math

from ..models.crop import CropConfig, CropRect, Focus, ImageDimensions


def round_half_up(value: float) -> int:
    """Round .5 towards +inf (Python's round() would give banker's rounding)."""
    return int(math.floor(value + 0.5))


def compute_crop(orig: ImageDimensions, cfg: CropConfig) -> CropRect:
    W, H = orig.width, orig.height
    out_ratio = cfg.width / cfg.height

    # "cover" style crop: fit output ratio inside original
    if W / H > out_ratio:
        # image is wider than target -> limit by height
        crop_h = H
        crop_w = round_half_up(H * out_ratio)
    else:
        # image is taller than target -> limit by width
        crop_w = W
        crop_h = round_half_up(W / out_ratio)

    # smaller crop region => zoom in when resized
    crop_w = max(1, round_half_up(crop_w / cfg.zoom))
    crop_h = max(1, round_half_up(crop_h / cfg.zoom))

    x = round_half_up((W - crop_w) / 2)
    y = round_half_up((H - crop_h) / 2)

    max_shift = round_half_up((W - crop_w) * cfg.cut_percent)
    if cfg.focus is Focus.LEFT:
        x = max(0, x - max_shift)
    elif cfg.focus is Focus.RIGHT:
        x = min(W - crop_w, x + max_shift)

    x = max(0, min(x, W - crop_w))
    y = max(0, min(y, H - crop_h))

    return CropRect(x=x, y=y, width=crop_w, height=crop_h)
