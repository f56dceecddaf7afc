from __future__ import annotations

import logging
import sys
from typing import Optional

LOGGER_NAME = "sampler"
LOG_FORMAT = "[ %(asctime)s ] : %(levelname)s : %(name)s : %(message)s"


def setup_logger(name: str = LOGGER_NAME, log_file: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """Configure the package logger once; child loggers propagate to it."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if name != LOGGER_NAME:
        logger.propagate = True
        setup_logger(LOGGER_NAME, log_file=log_file, level=level)
        return logger

    # Avoid duplicate handlers if called more than once (streamlit reruns)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%a %b %d %H:%M:%S %Y")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(module: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{module}")
