"""
Error taxonomy for the crop service.

ValidationError is always a client fault. Everything else is raised after
validation succeeded and is reported to callers as a generic failure.
"""

from typing import Optional


class CropError(Exception):
    """Base error; `kind` tags the failure for logs and callers."""
    kind = "crop"


class ValidationError(CropError):
    """Missing, malformed or disallowed request input."""
    kind = "validation"


class FetchError(CropError):
    """Network failure, timeout or oversized source while fetching."""
    kind = "fetch"

    def __init__(self, message: str, reason: str = "network", url: Optional[str] = None):
        super().__init__(message)
        self.reason = reason
        self.url = url


class DecodeError(CropError):
    """Malformed or unsupported source image."""
    kind = "decode"


class EncodeError(CropError):
    """Codec failure while producing the output JPEG."""
    kind = "encode"
