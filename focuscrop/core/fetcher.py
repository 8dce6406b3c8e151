"""
Bounded image download over httpx.

The whole fetch (redirects included) must finish inside the timeout, and the
body is counted while streaming so an oversized source aborts early instead of
being buffered first.
"""

import asyncio
import logging
from typing import Iterable, Optional
from urllib.parse import urljoin

import httpx

from .errors import FetchError, ValidationError
from .params import check_source_url

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
DEFAULT_MAX_REDIRECTS = 5


def _parse_length(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


class ImageFetcher:
    def __init__(
        self,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        user_agent: str = "focuscrop/1.0",
    ):
        self.max_redirects = max_redirects
        self.transport = transport
        self.headers = {"User-Agent": user_agent, "Accept": "image/*,*/*;q=0.8"}

    async def fetch(
        self,
        url: str,
        timeout_ms: int,
        max_bytes: int,
        allowed_hosts: Iterable[str] = (),
    ) -> bytes:
        """
        Download `url` and return its body.

        Raises:
            FetchError: timeout, too large, non-2xx status, blocked redirect
                or any transport failure
        """
        timeout_s = timeout_ms / 1000.0
        try:
            return await asyncio.wait_for(
                self._download(url, timeout_s, max_bytes, tuple(allowed_hosts)),
                timeout=timeout_s,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("[fetch] timed out after %sms: %s", timeout_ms, url)
            raise FetchError(f"Timed out after {timeout_ms}ms", reason="timeout", url=url)
        except httpx.HTTPError as exc:
            raise FetchError(f"Request failed: {exc}", reason="network", url=url) from exc
        except (httpx.InvalidURL, ValueError) as exc:
            # e.g. idna.IDNAError for a malformed internationalised host
            raise FetchError(f"Invalid URL: {exc}", reason="network", url=url) from exc

    async def _download(self, url: str, timeout_s: float, max_bytes: int, allowed_hosts: tuple) -> bytes:
        async with httpx.AsyncClient(
            headers=self.headers,
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=False,
            transport=self.transport,
        ) as client:
            current = url
            for _ in range(self.max_redirects + 1):
                async with client.stream("GET", current) as response:
                    if response.is_redirect:
                        current = self._next_hop(current, response, allowed_hosts)
                        continue
                    if not response.is_success:
                        raise FetchError(
                            f"Upstream responded {response.status_code}",
                            reason="http_status",
                            url=current,
                        )
                    return await self._read_limited(response, current, max_bytes)
        raise FetchError(f"Too many redirects (> {self.max_redirects})", reason="redirect", url=url)

    def _next_hop(self, current: str, response: httpx.Response, allowed_hosts: tuple) -> str:
        # is_redirect guarantees a Location header
        location = response.headers["location"]
        try:
            target = check_source_url(urljoin(current, location), allowed_hosts)
        except ValidationError as exc:
            logger.warning("[fetch] blocked redirect %s -> %s: %s", current, location, exc)
            raise FetchError(f"Redirect blocked: {exc}", reason="redirect", url=current) from exc
        logger.debug("[fetch] redirect %s -> %s", current, target)
        return target

    async def _read_limited(self, response: httpx.Response, url: str, max_bytes: int) -> bytes:
        declared = _parse_length(response.headers.get("content-length"))
        if declared is not None and declared > max_bytes:
            logger.warning("[fetch] declared size %s B > %s B: %s", declared, max_bytes, url)
            raise FetchError(f"Image too large ({declared} bytes)", reason="too_large", url=url)

        buffer = bytearray()
        async for chunk in response.aiter_bytes(CHUNK_SIZE):
            buffer += chunk
            if len(buffer) > max_bytes:
                logger.warning("[fetch] size limit exceeded: > %s B: %s", max_bytes, url)
                raise FetchError(f"Image too large (> {max_bytes} bytes)", reason="too_large", url=url)
        return bytes(buffer)
