"""
Shared fixtures: in-memory images, a fake fetcher and a test client wired to it.
"""

from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from focuscrop.api.crop import get_crop_defaults, get_pipeline
from focuscrop.core.pipeline import CropPipeline
from focuscrop.main import app
from focuscrop.models.crop import CropConfig, CropDefaults, Focus


def make_image_bytes(width=400, height=200, fmt="PNG", mode="RGB", color=(200, 40, 40)):
    im = Image.new(mode, (width, height), color)
    out = BytesIO()
    im.save(out, fmt)
    return out.getvalue()


def make_split_image_bytes(width=400, height=100):
    """Left half red, right half blue."""
    im = Image.new("RGB", (width, height), (255, 0, 0))
    im.paste((0, 0, 255), (width // 2, 0, width, height))
    out = BytesIO()
    im.save(out, "PNG")
    return out.getvalue()


def make_config(**overrides) -> CropConfig:
    values = dict(
        source_url="https://images.example.com/a.jpg",
        focus=Focus.LEFT,
        width=700,
        height=700,
        cut_percent=0.30,
        zoom=1.20,
        jpeg_quality=85,
    )
    values.update(overrides)
    return CropConfig(**values)


class FakeFetcher:
    """Stands in for ImageFetcher; records every call."""

    def __init__(self, payload=b"", error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    async def fetch(self, url, timeout_ms, max_bytes, allowed_hosts=()):
        self.calls.append(
            {"url": url, "timeout_ms": timeout_ms, "max_bytes": max_bytes, "allowed_hosts": tuple(allowed_hosts)}
        )
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def image_bytes():
    return make_image_bytes()


@pytest.fixture
def fake_fetcher(image_bytes):
    return FakeFetcher(payload=image_bytes)


@pytest.fixture
def crop_defaults():
    return CropDefaults()


@pytest.fixture
def client(fake_fetcher, crop_defaults):
    """Test client with the fake fetcher and defaults injected."""
    pipeline = CropPipeline(fetcher=fake_fetcher, timeout_ms=500, max_bytes=1_000_000)
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_crop_defaults] = lambda: crop_defaults
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
