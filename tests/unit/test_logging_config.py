"""ロギング設定のテスト"""
import io
import logging
from typing import Iterator

import pytest

from geoplaces.shared.logging import config


@pytest.fixture
def root_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[logging.Logger]:
    """テスト後にルートロガーの状態を戻す"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    monkeypatch.setattr(config, "_logger_configured", False)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_to_stream(root_logger) -> None:
    stream = io.StringIO()

    config.setup_logging(level="debug", stream=stream)
    config.get_logger("geoplaces.test").debug("dispatching request")

    assert root_logger.level == logging.DEBUG
    assert "geoplaces.test - DEBUG - dispatching request" in stream.getvalue()
    assert logging.getLogger("googlemaps").level == logging.WARNING


def test_setup_logging_runs_once_unless_forced(root_logger) -> None:
    first, second = io.StringIO(), io.StringIO()

    config.setup_logging(stream=first)
    config.setup_logging(level="ERROR", stream=second)
    assert root_logger.level == logging.INFO

    config.setup_logging(level="ERROR", stream=second, force=True)
    assert root_logger.level == logging.ERROR


def test_unknown_level_falls_back_to_info(root_logger) -> None:
    config.setup_logging(level="verbose", stream=io.StringIO())

    assert root_logger.level == logging.INFO
