"""Logging setup for depman.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
:func:`configure_logging` once to route records under ``depman_cli`` to a
rich handler on stderr.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "depman_cli"

_handler: Optional[RichHandler] = None


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a rich handler to the package logger and set its level.

    Safe to call more than once; later calls only change the level.
    """
    global _handler
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root_logger.addHandler(_handler)
        root_logger.propagate = False

    root_logger.setLevel(level)
    _handler.setLevel(level)
    return root_logger


def shutdown_logging() -> None:
    """Detach the rich handler installed by configure_logging."""
    global _handler
    if _handler is not None:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.removeHandler(_handler)
        root_logger.propagate = True
        _handler = None
