"""Package logger and the console setup used by the command-line entrypoint."""

import logging
import sys

# Initialize logger
logger = logging.getLogger("xipitree")


def configure_logging(verbose=False):
    """Attach a console handler to the package logger.

    Parameters
    ----------
    verbose : bool, default False
        If True, log at DEBUG level (per-batch gating counts), otherwise INFO
    """
    if not logger.handlers:
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
