"""Logging configuration for the CLI and the HTTP app."""

import logging
import sys


LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install a single stderr handler on the root logger.

    Safe to call repeatedly; existing handlers are replaced.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # SQL echo goes through sqlalchemy.engine; keep it quiet unless debugging
    if logging.getLevelName(root.level) != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
