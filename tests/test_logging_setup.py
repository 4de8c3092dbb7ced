"""Tests for root logging configuration."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from jupiter_bridge.config import LogLevel, LoggingSettings, Settings
from jupiter_bridge.logging_setup import QUIET_LOGGERS, ApplicationLogger, configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    quiet_levels = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, quiet_level in quiet_levels.items():
        logging.getLogger(name).setLevel(quiet_level)


class TestApplicationLogger:

    def test_console_only_by_default(self):
        logger = configure_logging(Settings(logging=LoggingSettings(level=LogLevel.WARNING)))

        root = logging.getLogger()
        assert logger.name == "jupiter_bridge"
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RotatingFileHandler)

    def test_debug_overrides_level(self):
        settings = Settings(debug=True, logging=LoggingSettings(level=LogLevel.ERROR))

        assert ApplicationLogger(settings).level == logging.DEBUG

    def test_rotating_file(self, tmp_path):
        log_file = tmp_path / "logs" / "bridge.log"
        settings = Settings(
            logging=LoggingSettings(
                file_enabled=True,
                file_path=log_file,
                file_max_bytes=4096,
                file_backup_count=2,
            )
        )

        logger = configure_logging(settings)
        logger.info("quote received")

        file_handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 4096
        assert file_handlers[0].backupCount == 2

        file_handlers[0].flush()
        assert "quote received" in log_file.read_text(encoding="utf-8")

    def test_quiets_noisy_loggers(self):
        configure_logging(Settings(debug=True))

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
