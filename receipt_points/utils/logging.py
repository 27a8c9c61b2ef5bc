import logging

from ..config import settings

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

def get_logger(name: str) -> logging.Logger:
    """Stdout logger with the service format; handlers are attached once."""
    log = logging.getLogger(name)
    if log.handlers:
        return log

    level = _LEVELS.get((settings.LOG_LEVEL or "").upper().strip(), logging.INFO)
    log.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    log.addHandler(handler)
    log.propagate = False
    return log

logger = get_logger("receipt_points")
