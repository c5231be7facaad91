# portal/logger.py
import logging
from logging.handlers import RotatingFileHandler
import os

DEFAULT_LOG_DIR = "logs"


def get_log_dir() -> str:
    # read per call so a .env loaded after import still applies
    return os.getenv("LOG_DIR", DEFAULT_LOG_DIR)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger  # handlers already attached

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # rotating file output, 10MB x 5
    log_dir = get_log_dir()
    os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "portal.log"),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
