"""Tests for environment settings and logging setup."""

import logging
import logging.handlers

import pytest

from finmetrics import config
from finmetrics.logging_config import LOGGER_NAME, setup_logging


def test_database_path_from_environment(monkeypatch, tmp_path):
    db_path = str(tmp_path / "metrics.db")
    monkeypatch.setenv(config.DB_PATH_ENV, db_path)
    assert config.get_database_path() == db_path


def test_database_path_default(monkeypatch):
    monkeypatch.delenv(config.DB_PATH_ENV, raising=False)
    assert config.get_database_path().endswith("finmetrics.db")


def test_log_level_default(monkeypatch):
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    assert config.get_log_level() == "WARNING"


def test_setup_logging_sets_level(monkeypatch):
    monkeypatch.delenv(config.LOG_FILE_ENV, raising=False)
    logger = setup_logging("debug")

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1


def test_setup_logging_is_repeatable(monkeypatch):
    monkeypatch.delenv(config.LOG_FILE_ENV, raising=False)
    setup_logging("INFO")
    logger = setup_logging("INFO")
    assert len(logger.handlers) == 1


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "finmetrics.log"
    logger = setup_logging("INFO", log_file=str(log_file))

    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers)
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in log_file.read_text()

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logging("CHATTY")
