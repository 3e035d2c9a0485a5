"""Tests for logging setup."""

import logging

import pytest

from sinaica import configuracion
from sinaica.configuracion import get_logger, setup_logging


def test_setup_logging_writes_file_and_console(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Given a log dir, when setting up logging, then a file and a console handler exist."""
    monkeypatch.setattr(configuracion, "LOG_DIR", tmp_path / "logs")

    logger = setup_logging("SINAICA_Test", "test.log")
    logger.debug("detalle")

    assert len(logger.handlers) == 2
    assert (tmp_path / "logs" / "test.log").exists()
    assert "detalle" in (tmp_path / "logs" / "test.log").read_text(encoding="utf-8")


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(configuracion, "LOG_DIR", tmp_path)

    setup_logging("SINAICA_Test2", "a.log")
    logger = setup_logging("SINAICA_Test2", "a.log")

    assert len(logger.handlers) == 2


def test_get_logger_defaults_to_package_logger() -> None:
    custom = logging.getLogger("custom")

    assert get_logger(custom) is custom
    assert get_logger().name == "SINAICA"
