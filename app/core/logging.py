"""
Logging utilities for the updater service and its operator scripts.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for console diagnostics."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    # httpx logs every request at INFO, which would include the desk URLs.
    logging.getLogger("httpx").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
