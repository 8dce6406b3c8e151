"""Side-biased smart thumbnails: fetch, crop toward one side, resize, re-encode JPEG."""

__version__ = "0.1.0"
