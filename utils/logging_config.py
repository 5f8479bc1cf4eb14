import logging
import sys
from typing import Optional


def configure_logging(level: Optional[str] = None) -> None:
    if level is None:
        from config import constants
        level = constants.LOG_LEVEL
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    logging.basicConfig(
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt,
    )
    # httpx logs every request at INFO; keep it for debugging only
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info("Logging is configured.")
