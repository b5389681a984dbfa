import logging
from typing import Optional

LOGGER_NAME = "notes"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_logger_initialized = False


def setup_logger(name: str = LOGGER_NAME, level: str = "INFO",
                 log_file: Optional[str] = None) -> logging.Logger:
    """配置日志记录器，重复调用只生效一次"""
    global _logger_initialized

    logger = logging.getLogger(name)
    if _logger_initialized:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger_initialized = True
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)


def shorten(text: str, limit: int = 80) -> str:
    text = text.replace("\n", " ")
    return text if len(text) <= limit else text[:limit] + "..."
