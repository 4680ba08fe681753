from __future__ import annotations

import logging

import pytest

from promptgate.core.logging import SDK_LOGGERS, configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    saved_sdk = {name: logging.getLogger(name).level for name in SDK_LOGGERS}
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for name, level in saved_sdk.items():
        logging.getLogger(name).setLevel(level)


def _own_handlers(root: logging.Logger) -> list:
    return [h for h in root.handlers if getattr(h, "_promptgate", False)]


def test_configure_logging_uses_log_level_setting(monkeypatch, restore_logging) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")

    configure_logging()

    assert restore_logging.level == logging.DEBUG


def test_configure_logging_keeps_sdk_loggers_at_warning(restore_logging) -> None:
    configure_logging("DEBUG")

    for name in SDK_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING

    configure_logging("ERROR")

    for name in SDK_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR


def test_configure_logging_attaches_one_stdout_handler(restore_logging) -> None:
    configure_logging("INFO")
    configure_logging("WARNING")

    handlers = _own_handlers(restore_logging)
    assert len(handlers) == 1
    assert handlers[0].formatter._fmt == "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    assert restore_logging.level == logging.WARNING
