"""Tests for the logging bootstrap in the console entry point."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

import pytest

from mindvault.main import default_log_file, setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_log_file_from_settings(
    tmp_path: Path, monkeypatch: Any, restore_root_logger: logging.Logger
) -> None:
    log_file = tmp_path / "logs" / "app.log"
    monkeypatch.setenv("MINDVAULT_LOG_FILE", str(log_file))
    monkeypatch.setenv("MINDVAULT_LOG_LEVEL", "DEBUG")

    setup_logging()
    logging.getLogger("mindvault.test").debug("hello file")

    assert restore_root_logger.level == logging.DEBUG
    assert "hello file" in log_file.read_text(encoding="utf-8")


def test_invalid_settings_fall_back_to_home(
    tmp_path: Path, monkeypatch: Any, restore_root_logger: logging.Logger
) -> None:
    """Bad settings never create a data directory in the working directory."""
    home = tmp_path / "home"
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("MINDVAULT_LOG_LEVEL", "LOUD")

    setup_logging()

    assert default_log_file() == home / ".mindvault" / "data" / "mindvault.log"
    assert default_log_file().parent.is_dir()
    assert not (workdir / "data").exists()
    assert restore_root_logger.level == logging.INFO


def test_http_loggers_are_quieted(
    tmp_path: Path, monkeypatch: Any, restore_root_logger: logging.Logger
) -> None:
    monkeypatch.setenv("MINDVAULT_LOG_FILE", str(tmp_path / "app.log"))

    setup_logging()

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
