from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_installed = False


def install_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the root logger and set the app log level."""
    global _installed
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    # Re-running only adjusts the level.
    logging.getLogger("focuscrop").setLevel(resolved)
    if _installed:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logging.getLogger().addHandler(handler)
    _installed = True
