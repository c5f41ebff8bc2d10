"""Tests for log.py"""

import logging
import os
from typing import Any, Callable

from url_hashing.utils import log
from url_hashing.utils.log import init_logger


class SpyMakedirs:
    """Record os.makedirs calls for testing, then create the folders"""

    def __init__(self, makedirs: Callable[..., None]) -> None:
        self.makedirs = makedirs
        self.received_args: Any = None

    def __call__(self, *args: Any) -> None:
        self.received_args = args
        self.makedirs(*args)


def test_init_logger(tmp_path, monkeypatch) -> None:
    """Test `init_logger`"""
    spy_makedirs = SpyMakedirs(os.makedirs)
    monkeypatch.setattr(os, "makedirs", spy_makedirs)
    logs_folder = str(tmp_path / "logs" / "nested")

    logger = init_logger(logs_folder)

    assert spy_makedirs.received_args[0] == logs_folder, (
        "Attempt to create 'logs/nested' folder should be made"
    )
    assert os.path.isdir(logs_folder)
    assert logging.getLevelName(logger.getEffectiveLevel()) == "INFO", (
        "Logging level should be 'INFO'"
    )


def test_init_logger_configured_folder(tmp_path, monkeypatch) -> None:
    """Test that `init_logger` defaults to the `LOGS_FOLDER` configuration value"""
    spy_makedirs = SpyMakedirs(os.makedirs)
    monkeypatch.setattr(os, "makedirs", spy_makedirs)
    logs_folder = str(tmp_path / "configured_logs")
    monkeypatch.setattr(log, "configured_logs_folder", lambda: logs_folder)

    init_logger()

    assert spy_makedirs.received_args[0] == logs_folder, (
        "Attempt to create configured logs folder should be made"
    )


def test_init_logger_existing_folder(tmp_path, monkeypatch) -> None:
    """Test that an existing logs folder is left alone"""
    spy_makedirs = SpyMakedirs(os.makedirs)
    monkeypatch.setattr(os, "makedirs", spy_makedirs)

    init_logger(str(tmp_path))

    assert spy_makedirs.received_args is None, "Existing logs folder should not be recreated"
