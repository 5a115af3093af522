"""
Logging configuration for the geodesix package.

Modules log through children of the ``geodesix`` logger
(``get_logger(__name__)``). Importing the package only attaches a
:class:`logging.NullHandler`, so a library user decides where messages go.
Scripts such as ``run_geodesic`` call :func:`setup_logger` to print them.
"""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "geodesix"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"


class _ConsoleHandler(logging.StreamHandler):
    """Stream handler owned by :func:`setup_logger`."""


def setup_logger(
    level: int = logging.INFO,
    fmt: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Print geodesix messages to a stream.

    Calling it again replaces the stream handler installed by an earlier call
    instead of adding a second one.

    Parameters
    ----------
    level : int, optional
        Logging level (e.g., logging.DEBUG, logging.INFO). Default is INFO.
    fmt : str, optional
        Custom format string. If None, timestamps, level and logger name are shown.
    stream : TextIO, optional
        Destination. Default is ``sys.stdout``.

    Returns
    -------
    logging.Logger
        The package logger.

    Examples
    --------
    >>> from geodesix.logging_config import setup_logger
    >>> logger = setup_logger()
    >>> logger.info("Integrating geodesic...")  # doctest: +SKIP
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, _ConsoleHandler):
            logger.removeHandler(handler)

    handler = _ConsoleHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT, DEFAULT_DATEFMT))
    logger.addHandler(handler)

    logger.setLevel(level)
    # The console handler already prints everything; don't repeat it via root
    logger.propagate = False
    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    """
    Logger for a module, placed under the package logger.

    Parameters
    ----------
    name : str, optional
        Usually ``__name__``. Names outside the package are nested under it.

    Returns
    -------
    logging.Logger
        Logger instance.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """
    Change the level of the package logger and its handlers.

    Examples
    --------
    >>> import logging
    >>> from geodesix.logging_config import set_log_level
    >>> set_log_level(logging.DEBUG)  # Show compile and solve details
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
