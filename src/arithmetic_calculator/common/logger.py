"""Shared logger for the arithmetic calculator."""
import logging


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger("arithmetic_calculator")

# Console output belongs to the results, log records go to stderr
handler = logging.StreamHandler()
handler.setFormatter(logging.Formatter(LOG_FORMAT))
logger.addHandler(handler)
logger.setLevel(logging.WARNING)
logger.propagate = False


def set_verbosity(verbose: bool) -> None:
    """
    Switch the package logger between quiet and debug output.

    :param bool verbose: True to log debug records, False for warnings only
    """
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
