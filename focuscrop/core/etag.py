"""
Cache identity for crop responses.

The ETag is derived from the canonical request parameters only, never from the
fetched bytes, so it is known before any network access. A source image that
changes under a stable URL keeps its old ETag.
"""

import hashlib

from ..models.crop import CropConfig


def _format_number(value) -> str:
    # 1.0 -> "1", 0.3 -> "0.3"; shortest round-trip form otherwise
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def cache_key(cfg: CropConfig) -> str:
    return (
        f"{cfg.source_url}|{cfg.focus.value}|{cfg.width}x{cfg.height}"
        f"|cut={_format_number(cfg.cut_percent)}"
        f"|zoom={_format_number(cfg.zoom)}"
        f"|q={cfg.jpeg_quality}"
    )


def derive_etag(cfg: CropConfig) -> str:
    digest = hashlib.sha1(cache_key(cfg).encode("utf-8")).hexdigest()
    return f'"{digest}"'


def etag_matches(if_none_match, etag: str) -> bool:
    """True when an If-None-Match header names `etag` (strong or weak form)."""
    if not if_none_match:
        return False
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == etag:
            return True
    return False
