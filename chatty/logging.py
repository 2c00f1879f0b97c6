"""Provides a logger factory that picks up the application log level."""

import logging
import sys
from typing import IO, Optional

from .context import get_application_config

LOG_FORMAT = 'application %(asctime)s - %(name)s - %(levelname)s: "%(message)s"'
DATE_FORMAT = '%d/%b/%Y:%H:%M:%S %z'


def getLogger(name: str, fmt: Optional[str] = None,
              stream: IO = sys.stderr) -> logging.Logger:
    """
    Wrapper for :func:`logging.getLogger` that applies configuration.

    Parameters
    ----------
    name : str
    fmt : str
        Overrides :const:`LOG_FORMAT`.
    stream : IO

    Returns
    -------
    :class:`logging.Logger`
    """
    logger = logging.getLogger(name)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=fmt or LOG_FORMAT,
                                           datefmt=DATE_FORMAT))
    logger.handlers = []
    logger.addHandler(handler)
    logger.propagate = False

    level = get_application_config().get('LOGLEVEL', logging.INFO)
    try:
        logger.setLevel(int(level))
    except ValueError:
        logger.setLevel(str(level).upper())
    return logger
