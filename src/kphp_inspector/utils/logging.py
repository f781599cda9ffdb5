"""
Logging configuration for the KPHP Inspector.

Modules log through ``logging.getLogger(__name__)``; this module attaches a
single rich handler writing to stderr to the package logger. Debug output is
enabled by ``--debug`` or ``debug: true`` in the configuration file.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


PACKAGE_LOGGER = "kphp_inspector"

_handler: Optional[RichHandler] = None
_handler_debug = False


def setup_logging(debug: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Calling it again never duplicates the handler; when the debug flag
    changes, the handler is replaced so that source paths are shown or hidden.

    Args:
        debug: Log at DEBUG level instead of WARNING

    Returns:
        The package logger
    """
    global _handler, _handler_debug

    logger = logging.getLogger(PACKAGE_LOGGER)

    if _handler is not None and _handler_debug != debug:
        logger.removeHandler(_handler)
        _handler = None

    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=debug,
            markup=False,
        )
        _handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(_handler)
        logger.propagate = False
        _handler_debug = debug

    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    _handler.setLevel(level)
    return logger
