"""
Logging Configuration

Configures logging for the reconciliation jobs.
Log records go to stderr (and optionally a file) so stdout stays reserved
for the per-product progress lines and job summaries.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "catalog_reconciler"

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s " + LOG_FORMAT

# HTTP client loggers that are only interesting when debugging
NOISY_LOGGERS = ("urllib3",)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str | Path] = None,
) -> None:
    """
    Configure logging for the reconciler package.

    Args:
        verbose: If True, set level to DEBUG and let HTTP client logs through
        quiet: If True, set level to WARNING
        log_file: Also append timestamped records to this file
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate handlers if called multiple times
    for old in logger.handlers:
        old.close()
    logger.handlers.clear()
    logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
