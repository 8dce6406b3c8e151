"""
Request parameter validation and normalization.

Only four things are fatal: a missing `src`, a bad `focus`, a `src` that is not
an absolute http(s) URL, and a host outside the configured allow-list. Numeric
values are lenient: anything unparsable falls back to the configured default,
and every number is clamped into its range afterwards.
"""

import logging
import math
import re
from typing import Iterable, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

import httpx
import idna

from ..models.crop import (
    CropConfig,
    CropDefaults,
    Focus,
    MAX_CUT_PERCENT,
    MAX_JPEG_QUALITY,
    MAX_SIDE,
    MAX_ZOOM,
    MIN_CUT_PERCENT,
    MIN_JPEG_QUALITY,
    MIN_SIDE,
    MIN_ZOOM,
)
from .errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_FORBIDDEN_HOST_CHARS = re.compile(r"[\s\x00-\x1f\x7f#%/<>?@\\^|\[\]]")


def parse_positive_int(value, fallback: int) -> int:
    """Leading integer of `value`, or `fallback` when missing or not > 0."""
    if value is None:
        return fallback
    match = _INT_PREFIX.match(str(value))
    if not match:
        return fallback
    number = int(match.group(1))
    return number if number > 0 else fallback


def parse_finite_float(value, fallback: float) -> float:
    """Leading decimal literal of `value`, or `fallback` when missing or not finite."""
    if value is None:
        return fallback
    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return fallback
    number = float(match.group(1))
    return number if math.isfinite(number) else fallback


def clamp(value, low, high):
    return min(max(value, low), high)


def check_source_url(src: str, allowed_hosts: Iterable[str] = ()) -> str:
    """
    Gate a source URL and return its canonical form.

    Also used by the fetcher on every redirect hop.

    Raises:
        ValidationError: not absolute, not http(s), or host not allow-listed
    """
    try:
        parts = urlsplit(src.strip())
        hostname = parts.hostname
        parts.port  # raises on a malformed port
    except ValueError:
        raise ValidationError("Invalid src URL")

    if not parts.scheme:
        raise ValidationError("Invalid src URL")
    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise ValidationError("Invalid src URL protocol")
    if not hostname or not _is_valid_host(hostname):
        raise ValidationError("Invalid src URL")

    canonical = urlunsplit((scheme, _canonical_netloc(parts.netloc), parts.path or "/", parts.query, parts.fragment))
    # must also be a URL the fetcher can request
    try:
        httpx.URL(canonical)
    except (httpx.InvalidURL, UnicodeError, ValueError):
        raise ValidationError("Invalid src URL")

    # SSRF protection: allow only known hosts
    allowed = {host.strip().lower() for host in allowed_hosts if host and host.strip()}
    if allowed and hostname not in allowed:
        raise ValidationError(f"Host not allowed: {hostname}")

    return canonical


def _is_valid_host(hostname: str) -> bool:
    if _FORBIDDEN_HOST_CHARS.search(hostname):
        return False
    # IDNA rules only apply to internationalised labels; plain ASCII names
    # such as "my_host" stay valid
    if hostname.isascii() and not any(label.startswith("xn--") for label in hostname.split(".")):
        return True
    try:
        idna.encode(hostname, uts46=True)
    except (idna.IDNAError, UnicodeError, ValueError):
        return False
    return True


def _canonical_netloc(netloc: str) -> str:
    userinfo, sep, hostport = netloc.rpartition("@")
    return f"{userinfo}{sep}{hostport.lower()}"


def _parse_focus(value: Optional[str]) -> Focus:
    try:
        return Focus((value or "").strip().lower())
    except ValueError:
        raise ValidationError("Invalid focus. Use left or right.")


def normalize_params(raw: Mapping[str, str], defaults: CropDefaults) -> CropConfig:
    """
    Build the canonical CropConfig for one request.

    Pure function of `raw` and `defaults`; no network access happens here.

    Raises:
        ValidationError: for the four fatal input problems
    """
    src = raw.get("src")
    if not src or not src.strip():
        raise ValidationError("Missing required parameter: src")
    focus = _parse_focus(raw.get("focus"))
    source_url = check_source_url(src, defaults.allowed_hosts)

    width = parse_positive_int(raw.get("width"), defaults.width)
    height = parse_positive_int(raw.get("height"), defaults.height)

    return CropConfig(
        source_url=source_url,
        focus=focus,
        width=clamp(width, MIN_SIDE, MAX_SIDE),
        height=clamp(height, MIN_SIDE, MAX_SIDE),
        cut_percent=clamp(float(defaults.cut_percent), MIN_CUT_PERCENT, MAX_CUT_PERCENT),
        zoom=clamp(float(defaults.zoom), MIN_ZOOM, MAX_ZOOM),
        jpeg_quality=clamp(int(defaults.jpeg_quality), MIN_JPEG_QUALITY, MAX_JPEG_QUALITY),
    )
