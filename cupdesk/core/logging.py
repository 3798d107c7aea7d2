from __future__ import annotations

import logging

from cupdesk.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return

    settings = get_settings()
    numeric = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    # uvicorn installs its own handlers; keep its access log at the same level.
    logging.getLogger("uvicorn.access").setLevel(numeric)
    _configured = True
