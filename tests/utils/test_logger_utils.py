from __future__ import annotations

import logging
import warnings
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING

import pytest

from utils.logger_utils import DEFAULT_NAMESPACE, SERVER_LOGGER_NAME, LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture
def fresh_logger_utils(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(LoggerUtils, "_configured", False)
    monkeypatch.setattr(LoggerUtils, "_instance", None)
    monkeypatch.setattr(warnings, "showwarning", warnings.showwarning)
    targets: list[logging.Logger] = [logging.getLogger(DEFAULT_NAMESPACE), logging.getLogger(SERVER_LOGGER_NAME)]
    saved: list[tuple[int, list[logging.Handler]]] = [(t.level, list(t.handlers)) for t in targets]

    yield

    for target, (level, handlers) in zip(targets, saved, strict=True):
        for handler in target.handlers:
            if handler not in handlers:
                handler.close()
        target.handlers = handlers
        target.setLevel(level)


def test_get_logger_is_namespaced() -> None:
    assert LoggerUtils.get_logger("core.trans.manager").name == f"{DEFAULT_NAMESPACE}.core.trans.manager"


def test_get_logger_without_name_returns_namespace_root() -> None:
    assert LoggerUtils.get_logger().name == DEFAULT_NAMESPACE


@pytest.mark.usefixtures("fresh_logger_utils")
def test_file_handler_receives_debug_records(tmp_path: Path) -> None:
    log_file: Path = tmp_path / "service.log"

    logger_utils = LoggerUtils(log_file, debug=True)
    LoggerUtils.get_logger("tests").debug("cache miss recorded")
    for handler in logger_utils.handlers:
        handler.flush()

    assert logging.getLogger(DEFAULT_NAMESPACE).level == logging.DEBUG
    assert "cache miss recorded" in log_file.read_text(encoding="utf-8")


@pytest.mark.usefixtures("fresh_logger_utils")
def test_server_logger_shares_handlers(tmp_path: Path) -> None:
    LoggerUtils(tmp_path / "service.log")

    server_handlers: list[logging.Handler] = logging.getLogger(SERVER_LOGGER_NAME).handlers
    assert any(isinstance(h, RotatingFileHandler) for h in server_handlers)
    assert logging.getLogger(SERVER_LOGGER_NAME).level == logging.INFO


@pytest.mark.usefixtures("fresh_logger_utils")
def test_second_instance_keeps_first_configuration(tmp_path: Path) -> None:
    first = LoggerUtils("", debug=False)
    second = LoggerUtils(tmp_path / "ignored.log", debug=True)

    assert first is second
    assert logging.getLogger(DEFAULT_NAMESPACE).level == logging.INFO
    assert not (tmp_path / "ignored.log").exists()


@pytest.mark.usefixtures("fresh_logger_utils")
def test_unopenable_log_file_falls_back_to_console(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    logger_utils = LoggerUtils(tmp_path / "missing" / "service.log")

    assert len(logger_utils.handlers) == 1
    assert any("Cannot open log file" in rec.message for rec in caplog.records)


@pytest.mark.usefixtures("fresh_logger_utils")
def test_warnings_are_routed_to_log(caplog: pytest.LogCaptureFixture) -> None:
    LoggerUtils("")

    with warnings.catch_warnings():
        warnings.simplefilter("always")
        warnings.warn("deprecated option", DeprecationWarning, stacklevel=1)

    assert any("deprecated option" in rec.message for rec in caplog.records)
