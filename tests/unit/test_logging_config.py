from __future__ import annotations

import logging
from pathlib import Path

import pytest

from shared import logging_config


def _flush_managed_handlers() -> None:
    for handler in logging.getLogger().handlers:
        if getattr(handler, logging_config._HANDLER_TAG, False):  # type: ignore[attr-defined]
            handler.flush()


@pytest.fixture(autouse=True)
def reset_logging():
    logging_config._reset_for_tests()
    try:
        yield
    finally:
        logging_config._reset_for_tests()


def test_logging_creates_file_and_records_info(tmp_path, monkeypatch):
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_DIR", str(tmp_path))

    log_path = logging_config.ensure_app_logging()
    assert log_path == tmp_path / "catalog.log"
    assert logging_config.get_file_log_verbosity() == logging_config.LogVerbosity.INFO
    logging.getLogger("instrument_catalog.templates").debug("debug message")
    logging.getLogger("instrument_catalog.reader").info("info message")
    _flush_managed_handlers()

    contents = log_path.read_text(encoding="utf-8")
    assert "debug message" not in contents
    assert "info message" in contents


def test_log_file_env_takes_precedence(tmp_path, monkeypatch):
    target = tmp_path / "custom" / "reader.log"
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_FILE", str(target))

    assert logging_config.ensure_app_logging() == target
    assert target.exists()


def test_logging_configuration_is_idempotent(tmp_path, monkeypatch):
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_DIR", str(tmp_path))

    first_path = logging_config.ensure_app_logging()
    second_path = logging_config.ensure_app_logging()

    assert first_path == second_path
    managed_handlers = [
        handler
        for handler in logging.getLogger().handlers
        if getattr(handler, logging_config._HANDLER_TAG, False)  # type: ignore[attr-defined]
    ]

    # Only the file handler should be installed during tests (stderr is not a tty).
    assert len(managed_handlers) == 1
    assert isinstance(managed_handlers[0], logging.FileHandler)
    assert Path(managed_handlers[0].baseFilename) == first_path


def test_initial_verbosity_can_be_requested(tmp_path, monkeypatch):
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_DIR", str(tmp_path))

    log_path = logging_config.ensure_app_logging("verbose")
    logging.getLogger("instrument_catalog.drumset").debug("debug message")
    _flush_managed_handlers()

    assert logging_config.get_file_log_verbosity() == logging_config.LogVerbosity.VERBOSE
    assert "debug message" in log_path.read_text(encoding="utf-8")


def test_can_adjust_file_log_verbosity(tmp_path, monkeypatch):
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_DIR", str(tmp_path))

    log_path = logging_config.ensure_app_logging()
    logging_config.set_file_log_verbosity(logging_config.LogVerbosity.ERROR)
    logging.getLogger("tests.logging").warning("warning message")
    logging.getLogger("tests.logging").error("error message")
    _flush_managed_handlers()

    contents = log_path.read_text(encoding="utf-8")
    assert "warning message" not in contents
    assert "error message" in contents
    assert logging_config.get_file_log_verbosity() == logging_config.LogVerbosity.ERROR


def test_unknown_verbosity_is_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_DIR", str(tmp_path))

    with pytest.raises(ValueError):
        logging_config.set_file_log_verbosity("chatty")


def test_coerce_verbosity_falls_back_to_default():
    assert logging_config.coerce_verbosity(" Warning ") == logging_config.LogVerbosity.WARNING
    assert logging_config.coerce_verbosity("chatty") == logging_config.LogVerbosity.INFO
    assert logging_config.coerce_verbosity(None, logging_config.LogVerbosity.ERROR) == logging_config.LogVerbosity.ERROR


def test_disabling_file_logging_suppresses_output(tmp_path, monkeypatch):
    monkeypatch.setenv("INSTRUMENT_CATALOG_LOG_DIR", str(tmp_path))

    log_path = logging_config.ensure_app_logging()
    logging_config.set_file_log_verbosity(logging_config.LogVerbosity.DISABLED)
    _flush_managed_handlers()
    initial_size = log_path.stat().st_size

    logging.getLogger("tests.logging").critical("critical message")
    _flush_managed_handlers()

    assert log_path.stat().st_size == initial_size
