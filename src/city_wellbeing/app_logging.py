"""Logging configuration helpers."""

import logging

LOGGER_NAME = "city_wellbeing"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger and apply the level.

    Calling it again only updates the level, so app factories invoked per
    test do not stack handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
        )
        logger.addHandler(handler)
        logger.propagate = False
    return logger
