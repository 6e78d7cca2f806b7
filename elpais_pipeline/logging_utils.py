"""
elpais_pipeline/logging_utils.py
--------------------------------
Console / file logging setup for the pipeline loggers.
"""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: str | Path | None = None) -> logging.Logger:
    """Console (and optional file) logging for the elpais_pipeline loggers."""
    logger = logging.getLogger("elpais_pipeline")
    logger.setLevel(_level_from_string(level))
    logger.handlers = []
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


def _level_from_string(level: str) -> int:
    return getattr(logging, str(level).upper(), logging.INFO)
