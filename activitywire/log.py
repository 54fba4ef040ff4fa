import logging
from datetime import datetime
from logging import Handler, Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "activitywire"


def get_logger() -> Logger:
    return logging.getLogger(LOGGER_NAME)


def create_logger(verbose: bool, log: Optional[Path] = None) -> Logger:
    level = logging.DEBUG if verbose else logging.WARNING
    handler: Handler
    if log:
        log.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            filename=log,
            mode="a+",
            maxBytes=1024 * 1024 * 10,
            backupCount=5,
            encoding="utf-8",
        )
        handler.setFormatter(
            logging.Formatter("(%(asctime)s)[%(levelname)s] %(name)s: %(message)s", datefmt="%H:%M:%S")
        )
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger = get_logger()
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.setLevel(level)
    logger.addHandler(handler)
    logger.debug(f"Logging started at: {datetime.now()}")
    return logger
