"""Tests for centralized logging configuration."""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from tradestats.system import LoggerFactory, LoggingConfig


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before and after each test."""
    LoggerFactory.reset()
    yield
    LoggerFactory.reset()


def test_default_configuration():
    """Default config logs INFO to the console only."""
    logger = LoggerFactory.get_logger()

    assert LoggerFactory.is_configured()
    assert hasattr(logger, "info")

    config = LoggerFactory.get_config()
    assert config.level == "INFO"
    assert config.format == "console"
    assert config.enable_file is False


def test_explicit_configuration():
    LoggerFactory.configure(LoggingConfig(level="DEBUG", format="json"))

    assert LoggerFactory.is_configured()
    assert LoggerFactory.get_config().level == "DEBUG"
    assert LoggerFactory.get_config().format == "json"


def test_auto_configure_on_first_use():
    assert not LoggerFactory.is_configured()

    LoggerFactory.get_logger("tradestats.engine")

    assert LoggerFactory.is_configured()


def test_file_logs_are_json_lines(tmp_path):
    """File output is one JSON object per record."""
    # Arrange
    log_file = tmp_path / "tradestats.log"
    LoggerFactory.configure(
        LoggingConfig(enable_file=True, file_path=log_file, file_level="INFO", file_rotation=False)
    )
    logger = LoggerFactory.get_logger()

    # Act
    logger.info("records.loaded", fills=12, positions=3)

    # Assert
    record = json.loads(log_file.read_text().strip())
    assert record["event"] == "records.loaded"
    assert record["fills"] == 12
    assert record["level"].upper() == "INFO"
    assert "log_timestamp" in record


def test_file_logging_creates_directory(tmp_path):
    log_file = tmp_path / "logs" / "nested" / "run.log"

    LoggerFactory.configure(LoggingConfig(enable_file=True, file_path=log_file, file_rotation=False))
    LoggerFactory.get_logger().error("records.invalid", errors=2)

    assert log_file.exists()


def test_rotating_file_handler(tmp_path):
    log_file = tmp_path / "rotating.log"

    LoggerFactory.configure(
        LoggingConfig(enable_file=True, file_path=log_file, max_file_size_mb=1, backup_count=5)
    )

    handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    handler = next(h for h in handlers if str(log_file) in h.baseFilename)
    assert handler.maxBytes == 1024 * 1024
    assert handler.backupCount == 5


def test_file_level_independent_from_console_level(tmp_path):
    """Console shows WARNING+, file captures DEBUG+."""
    # Arrange
    log_file = tmp_path / "debug.log"
    LoggerFactory.configure(
        LoggingConfig(level="WARNING", enable_file=True, file_path=log_file, file_level="DEBUG", file_rotation=False)
    )
    logger = LoggerFactory.get_logger()

    # Act
    logger.debug("analytics.bundle_computed", returns=10)
    logger.warning("records.partial")

    # Assert
    events = [json.loads(line)["event"] for line in log_file.read_text().splitlines() if line.strip()]
    assert events == ["analytics.bundle_computed", "records.partial"]


@pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
def test_log_levels(level):
    LoggerFactory.configure(LoggingConfig(level=level))

    assert LoggerFactory.get_config().level == level
    assert logging.getLogger().level == getattr(logging, level)


def test_invalid_level_rejected():
    with pytest.raises(ValueError):
        LoggingConfig(level="VERBOSE")


def test_reset_clears_configuration():
    LoggerFactory.configure(LoggingConfig(level="DEBUG"))

    LoggerFactory.reset()

    assert not LoggerFactory.is_configured()
    assert LoggerFactory.get_config().level == "INFO"
