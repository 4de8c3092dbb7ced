import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import LoggingSettings, Settings

QUIET_LOGGERS = ("aiohttp", "asyncio", "urllib3")


class ApplicationLogger:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.logger: Optional[logging.Logger] = None

    @property
    def level(self) -> int:
        if self.settings.debug:
            return logging.DEBUG
        return getattr(logging, self.settings.logging.level.value)

    def setup(self) -> logging.Logger:
        log_settings: LoggingSettings = self.settings.logging

        root_logger = logging.getLogger()
        root_logger.setLevel(self.level)

        root_logger.handlers.clear()

        formatter = logging.Formatter(log_settings.format, datefmt=log_settings.date_format)

        # stdout carries CLI results
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(self.level)
        root_logger.addHandler(console_handler)

        if log_settings.file_enabled:
            log_settings.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_settings.file_path,
                maxBytes=log_settings.file_max_bytes,
                backupCount=log_settings.file_backup_count,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            root_logger.addHandler(file_handler)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        self.logger = logging.getLogger("jupiter_bridge")
        return self.logger


def configure_logging(settings: Settings) -> logging.Logger:
    """Install root handlers from settings and return the package logger."""
    return ApplicationLogger(settings).setup()


__all__ = ["ApplicationLogger", "configure_logging"]
