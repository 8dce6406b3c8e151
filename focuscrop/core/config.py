from pydantic import field_validator
from pydantic_settings import BaseSettings

from ..models.crop import CropDefaults
from .params import parse_finite_float, parse_positive_int

_INT_FIELDS = (
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "JPEG_QUALITY",
    "FETCH_TIMEOUT_MS",
    "MAX_IMAGE_BYTES",
    "MAX_REDIRECTS",
    "PORT",
)
_FLOAT_FIELDS = ("CUT_PERCENT", "ZOOM")


class Settings(BaseSettings):
    # Load env from .env file
    model_config = {"env_file": ".env", "extra": "ignore"}

    # Source gating; comma separated, empty allows any host
    ALLOWED_HOSTS: str = ""

    # Crop defaults
    DEFAULT_WIDTH: int = 700
    DEFAULT_HEIGHT: int = 700
    CUT_PERCENT: float = 0.30
    ZOOM: float = 1.20
    JPEG_QUALITY: int = 85

    # Fetch limits
    FETCH_TIMEOUT_MS: int = 8000
    MAX_IMAGE_BYTES: int = 15_000_000
    MAX_REDIRECTS: int = 5

    # Server
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    @field_validator(*_INT_FIELDS, mode="before")
    @classmethod
    def _lenient_int(cls, value, info):
        return parse_positive_int(value, cls.model_fields[info.field_name].default)

    @field_validator(*_FLOAT_FIELDS, mode="before")
    @classmethod
    def _lenient_float(cls, value, info):
        return parse_finite_float(value, cls.model_fields[info.field_name].default)

    @property
    def allowed_hosts(self) -> tuple:
        return tuple(h.strip().lower() for h in self.ALLOWED_HOSTS.split(",") if h.strip())

    def crop_defaults(self) -> CropDefaults:
        return CropDefaults(
            width=self.DEFAULT_WIDTH,
            height=self.DEFAULT_HEIGHT,
            cut_percent=self.CUT_PERCENT,
            zoom=self.ZOOM,
            jpeg_quality=self.JPEG_QUALITY,
            allowed_hosts=self.allowed_hosts,
        )


# Instantiate settings
settings = Settings()
