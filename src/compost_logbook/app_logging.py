"""Logging configuration helpers."""

import logging

PACKAGE_LOGGER = "compost_logbook"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"
# The Supabase client logs every HTTP request; paged log reads make that noisy.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger at the given level."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
