"""Logging configuration for VenceHoje.

Logs go to the console and to a dated file (vencehoje-YYYY-MM-DD.log) that
follows the calendar, so the long-running reminder loop starts a new file
each day. APScheduler's own records are routed to the same handlers.
"""

import logging
from datetime import date
from config import Config

LOGGER_NAME = "vencehoje"


class DatedFileHandler(logging.FileHandler):
    """File handler writing to ``<prefix>-<today>.log`` in ``log_dir``."""

    def __init__(self, log_dir, prefix=LOGGER_NAME):
        self.log_dir = log_dir
        self.prefix = prefix
        self.current_date = date.today()
        super().__init__(self._path_for(self.current_date), encoding="utf-8")

    def _path_for(self, day):
        return self.log_dir / f"{self.prefix}-{day.isoformat()}.log"

    def emit(self, record):
        today = date.today()
        if today != self.current_date:
            self.acquire()
            try:
                if self.stream:
                    self.stream.close()
                    self.stream = None
                self.current_date = today
                self.baseFilename = str(self._path_for(today))
            finally:
                self.release()
        super().emit(record)


def setup_logging(config: Config) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Clear any existing handlers (in case this is called multiple times)
    logger.handlers.clear()

    file_handler = DatedFileHandler(config.log_dir)
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    # Job execution chatter only at DEBUG
    scheduler_logger = logging.getLogger("apscheduler")
    scheduler_logger.handlers.clear()
    scheduler_logger.setLevel(
        logging.DEBUG if config.log_level == "DEBUG" else logging.WARNING
    )
    scheduler_logger.addHandler(file_handler)
    scheduler_logger.propagate = False

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger.

    Returns:
        The vencehoje logger instance.
    """
    return logging.getLogger(LOGGER_NAME)
