import logging

import uvicorn

from .core.config import settings
from .core.log_setup import install_logging

logger = logging.getLogger(__name__)


def main() -> None:
    install_logging(settings.LOG_LEVEL)
    logger.info("Image cropper listening on port %s", settings.PORT)
    uvicorn.run("focuscrop.main:app", host="0.0.0.0", port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
