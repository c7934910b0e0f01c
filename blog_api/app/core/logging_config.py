"""
Logging configuration for the Blog API.

Handlers go on the root logger so that uvicorn and the application
share one format.  The level is applied to the ``blog_api`` logger
only, which keeps third-party libraries at their own defaults while
``LOG_LEVEL`` controls what the services report.

``setup_logging`` is called by every ``create_app``.  Handlers are
tagged when created, so repeated calls reuse them instead of piling up
duplicates, but a later call with a new ``LOG_FILE`` still adds a file
handler for it.
"""

import logging
from pathlib import Path

from .config import Settings

APP_LOGGER_NAME = "blog_api"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
# Attribute set on handlers created here.
_HANDLER_TAG = "_blog_api_target"


def _tagged(root: logging.Logger, target: str) -> bool:
    return any(getattr(handler, _HANDLER_TAG, None) == target for handler in root.handlers)


def _attach(root: logging.Logger, handler: logging.Handler, target: str) -> None:
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    setattr(handler, _HANDLER_TAG, target)
    root.addHandler(handler)


def setup_logging(settings: Settings) -> logging.Logger:
    """Apply ``settings.log_level`` and ``settings.log_file``.

    Parameters
    ----------
    settings : Settings
        ``log_level`` is a level name such as ``"DEBUG"``, case
        insensitive; unknown names fall back to ``INFO``.  ``log_file``
        is an optional path, resolved against the working directory.

    Returns
    -------
    logging.Logger
        The ``blog_api`` package logger.
    """
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    root = logging.getLogger()
    if not _tagged(root, "console"):
        _attach(root, logging.StreamHandler(), "console")

    if settings.log_file:
        log_path = str(Path(settings.log_file).resolve())
        if not _tagged(root, log_path):
            _attach(root, logging.FileHandler(log_path, encoding="utf-8"), log_path)
    return app_logger
