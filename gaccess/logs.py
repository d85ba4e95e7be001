# gaccess/logs.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger (idempotent)."""
    logger = logging.getLogger("gaccess")
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(h)
    logger.setLevel(level.upper())
    return logger
