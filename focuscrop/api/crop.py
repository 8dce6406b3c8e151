"""
Focus crop endpoint.

GET /crop?src=<url>&focus=left|right&width=700&height=700

- src: required
- focus: left/right (required)
- width/height: optional (defaults from env)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from ..core.config import settings
from ..core.errors import CropError, ValidationError
from ..core.etag import derive_etag, etag_matches
from ..core.fetcher import ImageFetcher
from ..core.params import normalize_params
from ..core.pipeline import CropPipeline
from ..models.crop import CropDefaults

logger = logging.getLogger(__name__)

router = APIRouter(tags=["crop"])

# Strong caching: the URL is deterministic (src+focus+size)
CACHE_CONTROL = "public, max-age=31536000, immutable"

_defaults = settings.crop_defaults()
_pipeline = CropPipeline(
    fetcher=ImageFetcher(max_redirects=settings.MAX_REDIRECTS),
    timeout_ms=settings.FETCH_TIMEOUT_MS,
    max_bytes=settings.MAX_IMAGE_BYTES,
    allowed_hosts=settings.allowed_hosts,
)


def get_crop_defaults() -> CropDefaults:
    return _defaults


def get_pipeline() -> CropPipeline:
    return _pipeline


@router.get("/crop")
async def crop_image(
    request: Request,
    defaults: CropDefaults = Depends(get_crop_defaults),
    pipeline: CropPipeline = Depends(get_pipeline),
):
    # Raw strings on purpose: malformed width/height fall back, they never 422
    try:
        cfg = normalize_params(dict(request.query_params), defaults)
    except ValidationError as e:
        logger.info("[crop] rejected %s: %s", request.url.query, e)
        return JSONResponse(status_code=400, content={"error": str(e)})

    etag = derive_etag(cfg)
    cache_headers = {"ETag": etag, "Cache-Control": CACHE_CONTROL}

    # The ETag does not depend on the fetched bytes, so answer before fetching
    if etag_matches(request.headers.get("if-none-match"), etag):
        logger.debug("[crop] not modified: %s", cfg.source_url)
        return Response(status_code=304, headers=cache_headers)

    try:
        result = await pipeline.process(cfg)
    except CropError as e:
        logger.error(
            "[crop] %s failure for %s: %s",
            e.kind, cfg.source_url, e,
            exc_info=e.__cause__ is not None,
        )
        return JSONResponse(status_code=500, content={"error": "Failed to process image"})
    except Exception:
        logger.exception("[crop] unexpected failure for %s", cfg.source_url)
        return JSONResponse(status_code=500, content={"error": "Failed to process image"})

    return Response(content=result.content, media_type=result.content_type, headers=cache_headers)
