"""Logging setup shared by the SDK and CLI.

Level comes from the LOG_LEVEL environment variable (default INFO).
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the process.

    Args:
        level: Explicit level name (e.g. "DEBUG"). Falls back to LOG_LEVEL.
    """
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
    logging.getLogger("shiftpay").setLevel(getattr(logging, level_name, logging.INFO))
