"""
Crop pipeline: fetch -> read dimensions -> compute rectangle -> extract/resize/encode.

No retries happen here. Anything that goes wrong escapes as a CropError
subclass (FetchError, DecodeError or EncodeError) so the caller can classify it.
"""

import asyncio
import logging
from typing import Iterable, Optional

from ..models.crop import CropConfig, CropResult
from . import codec
from .errors import CropError, DecodeError, EncodeError
from .etag import derive_etag
from .fetcher import ImageFetcher
from .geometry import compute_crop

logger = logging.getLogger(__name__)


class CropPipeline:
    def __init__(
        self,
        fetcher: Optional[ImageFetcher] = None,
        timeout_ms: int = 8000,
        max_bytes: int = 15_000_000,
        allowed_hosts: Iterable[str] = (),
    ):
        self.fetcher = fetcher or ImageFetcher()
        self.timeout_ms = timeout_ms
        self.max_bytes = max_bytes
        self.allowed_hosts = tuple(allowed_hosts)

    async def process(self, cfg: CropConfig) -> CropResult:
        etag = derive_etag(cfg)

        data = await self.fetcher.fetch(
            cfg.source_url,
            timeout_ms=self.timeout_ms,
            max_bytes=self.max_bytes,
            allowed_hosts=self.allowed_hosts,
        )

        # Decoding and encoding are CPU-bound; keep them off the event loop
        try:
            dims = await asyncio.to_thread(codec.read_dimensions, data)
        except CropError:
            raise
        except Exception as exc:
            raise DecodeError(f"Unexpected codec failure: {exc}") from exc
        rect = compute_crop(dims, cfg)
        try:
            content = await asyncio.to_thread(
                codec.extract_resize_encode,
                data,
                rect,
                cfg.width,
                cfg.height,
                cfg.jpeg_quality,
            )
        except CropError:
            raise
        except Exception as exc:
            raise EncodeError(f"Unexpected codec failure: {exc}") from exc

        logger.info(
            "[crop] %s focus=%s %sx%s -> rect=(%s,%s,%s,%s) out=%sx%s %s B",
            cfg.source_url, cfg.focus.value, dims.width, dims.height,
            rect.x, rect.y, rect.width, rect.height,
            cfg.width, cfg.height, len(content),
        )
        return CropResult(content=content, etag=etag)
