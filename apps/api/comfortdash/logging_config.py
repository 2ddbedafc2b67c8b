from __future__ import annotations

import logging

FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

def setup_logging(log_level: str = "INFO") -> None:
    """Console logging for the API process. Safe to call more than once."""
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATEFMT))
        logger.addHandler(handler)

    # httpx logs every request at INFO, including the query string with appid
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
