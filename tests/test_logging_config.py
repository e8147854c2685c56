"""Tests for command-line logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

import logging_config
from logging_config import resolve_level, setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_resolve_level_prefers_argument(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert resolve_level("debug") == logging.DEBUG


def test_resolve_level_falls_back_to_env_then_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert resolve_level() == logging.WARNING

    monkeypatch.delenv("LOG_LEVEL")
    assert resolve_level() == logging.INFO
    assert resolve_level("verbose") == logging.INFO


def test_setup_logging_installs_single_handler(restore_root_logger: None) -> None:
    setup_logging("WARNING")
    setup_logging("DEBUG")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.INFO

    setup_logging("INFO")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_public_names_are_all_defined() -> None:
    assert sorted(logging_config.__all__) == ["get_logger", "resolve_level", "setup_logging"]
    assert all(callable(getattr(logging_config, name)) for name in logging_config.__all__)
