"""Logging setup for perch processes.

Library modules only ever call ``logging.getLogger("perch.<area>")``;
handlers are installed once, by the CLI, through ``configure_logging``.
"""

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "info") -> logging.Logger:
    """Attach a single stderr handler to the ``perch`` logger.

    Safe to call more than once: an existing perch handler is replaced,
    not duplicated.
    """
    logger = logging.getLogger("perch")
    numeric = logging.getLevelNamesMapping().get(level.upper())
    if numeric is None:
        msg = f"Unknown log level: {level!r}"
        raise ValueError(msg)

    for handler in list(logger.handlers):
        if getattr(handler, "_perch", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._perch = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
    return logger
