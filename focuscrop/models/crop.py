"""
Value types shared by the crop service.

All of them are immutable: a CropConfig is built once per request and only
read afterwards, CropRect and CropResult are derived from it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

# Hard limits to avoid abuse
MIN_SIDE = 50
MAX_SIDE = 2000
MIN_CUT_PERCENT = 0.0
MAX_CUT_PERCENT = 0.60
MIN_ZOOM = 1.0
MAX_ZOOM = 2.0
MIN_JPEG_QUALITY = 40
MAX_JPEG_QUALITY = 95

JPEG_CONTENT_TYPE = "image/jpeg"


class Focus(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class CropDefaults:
    """Process-wide defaults and allow-list, read once at start-up."""
    width: int = 700
    height: int = 700
    cut_percent: float = 0.30
    zoom: float = 1.20
    jpeg_quality: int = 85
    allowed_hosts: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CropConfig:
    source_url: str
    focus: Focus
    width: int
    height: int
    cut_percent: float
    zoom: float
    jpeg_quality: int

    def to_query(self) -> Dict[str, str]:
        """Canonical request form; normalizing it gives back this config."""
        return {
            "src": self.source_url,
            "focus": self.focus.value,
            "width": str(self.width),
            "height": str(self.height),
        }


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int


@dataclass(frozen=True)
class CropRect:
    x: int
    y: int
    width: int
    height: int

    def box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower) as Pillow expects it."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class CropResult:
    content: bytes = field(repr=False)
    etag: str
    content_type: str = JPEG_CONTENT_TYPE
