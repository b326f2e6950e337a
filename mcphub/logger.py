"""Logging setup for the mcphub command line."""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "mcphub"


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Route mcphub log records through a Rich handler.

    Args:
        verbose: Force DEBUG level.
        console: Rich Console to write to. Defaults to stderr.

    Environment variables:
        MCPHUB_LOG_LEVEL: Level when not verbose (default WARNING).
    """
    if verbose:
        level = logging.DEBUG
    else:
        env_level = os.getenv("MCPHUB_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, env_level, logging.WARNING)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
