"""Logging setup for the API process."""

import logging

from money_manager.config import Settings

LOGGER_NAME = "money_manager"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach a console handler to the package logger.

    Every module logs through ``logging.getLogger(__name__)``, so all
    of them propagate to the ``money_manager`` logger configured here.
    Calling this twice replaces the handler instead of duplicating it.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.LOG_LEVEL, logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler()
    if settings.DEBUG:
        fmt = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
    else:
        fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)

    logger.info(
        "Logging initialized (level=%s, environment=%s)",
        settings.LOG_LEVEL,
        settings.ENVIRONMENT,
    )
    return logger
