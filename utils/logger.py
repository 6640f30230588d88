import logging
import os
from logging.handlers import RotatingFileHandler

from config import LOG_PATH

API_LOGGER_NAME = "tripwell.api"


def setup_api_logger(log_path: str | None = None) -> logging.Logger:
    """Setup and return an application-wide logger for API errors.

    Creates a rotating file handler at `log_path` (defaults to $LOG_PATH,
    then ./logs/api.log).
    """
    if log_path is None:
        log_path = LOG_PATH
    if log_path is None:
        base = os.path.abspath(os.path.dirname(__file__))
        log_path = os.path.join(base, '..', 'logs', 'api.log')
    os.makedirs(os.path.dirname(os.path.abspath(log_path)), exist_ok=True)

    logger = logging.getLogger(API_LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # avoid adding multiple handlers if called multiple times
    if not logger.handlers:
        handler = RotatingFileHandler(log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding='utf-8')
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the API logger, e.g. get_logger("services.tripcrew")."""
    return logging.getLogger(f"{API_LOGGER_NAME}.{name}")
