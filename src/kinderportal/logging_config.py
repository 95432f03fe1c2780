"""Root logging setup for the API process."""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the root handler once and return the package logger."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)

    logger = logging.getLogger("kinderportal")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
