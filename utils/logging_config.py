# utils/logging_config.py
import logging


def setup_logging(level: int = logging.INFO) -> None:
    """Route all log records at ``level`` and above to a single console handler."""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s',
                                      datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(ch)


def get_logger(name: str) -> logging.Logger:
    """Module logger; its level is inherited from the root logger."""
    return logging.getLogger(name)
