from fastapi import FastAPI, Request

from .api.crop import router as crop_router
from .api.routes_health import router as health_router
from .core.config import settings
from .core.log_setup import install_logging

install_logging(settings.LOG_LEVEL)

app = FastAPI(title="Focus Crop", description="Side-biased smart thumbnails")

# We serve images to other origins; keep the rest of the defaults strict
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Cross-Origin-Resource-Policy": "cross-origin",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


app.include_router(health_router)
app.include_router(crop_router)
