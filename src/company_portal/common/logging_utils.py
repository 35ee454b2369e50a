from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one console handler to the package logger (idempotent)."""

    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logger = logging.getLogger("company_portal")
    logger.setLevel(log_level)

    if not any(getattr(h, "_company_portal", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._company_portal = True
        logger.addHandler(handler)
