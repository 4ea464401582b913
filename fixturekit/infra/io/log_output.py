"""Logging setup for fixturekit.

Library code only ever logs through ``logging.getLogger(__name__)``; this
module attaches a handler to the ``fixturekit`` logger for the CLI and for
test runs that want to see resolution traces.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_HANDLER_NAME = "fixturekit_console"


def configure_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Handler:
    """Attach a console handler to the ``fixturekit`` logger.

    Calling it again replaces the previously installed handler.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        stream: Output stream (default: stderr).

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    handler.set_name(_HANDLER_NAME)

    package_logger = logging.getLogger("fixturekit")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for existing in package_logger.handlers[:]:
        if existing.get_name() == _HANDLER_NAME:
            existing.close()
            package_logger.removeHandler(existing)

    package_logger.addHandler(handler)
    return handler
