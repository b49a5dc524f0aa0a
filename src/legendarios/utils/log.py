"""Logging setup for the command line.

Usage:
    from legendarios.utils.log import setup_logging
    setup_logging(verbose=True)
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that are too chatty below WARNING
NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
]


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``legendarios`` logger to write to stderr.

    Messages are WARNING and above by default so command output stays
    clean; ``verbose`` lowers the threshold to DEBUG.
    """
    logger = logging.getLogger("legendarios")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Replace rather than reuse: sys.stderr may have been swapped since the last call
    for handler in [h for h in logger.handlers if getattr(h, "_legendarios", False)]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler._legendarios = True
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
