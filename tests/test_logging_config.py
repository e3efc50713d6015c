"""
AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

Unit tests for logging configuration helper.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest

from aibom import logging_config


@pytest.fixture()
def basic_config_calls(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    """
    basic_config_calls: Function description.
    :param monkeypatch:
    :returns:
    """

    calls: List[Dict[str, Any]] = []

    def fake_basic_config(**kwargs: Any) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(logging_config.logging, "basicConfig", fake_basic_config)
    return calls


def test_read_level_invalid_returns_none() -> None:
    assert logging_config._read_level("not-an-int") is None


def test_map_level_thresholds() -> None:
    assert logging_config._map_level(1) == logging_config.logging.INFO
    assert logging_config._map_level(2) == logging_config.logging.DEBUG


def test_silent_mode_skips_basic_config(
    basic_config_calls: List[Dict[str, Any]],
) -> None:
    logging_config.configure_logging()

    assert basic_config_calls == []


def test_stderr_handler_configured_once(
    monkeypatch: pytest.MonkeyPatch,
    basic_config_calls: List[Dict[str, Any]],
) -> None:
    """
    test_stderr_handler_configured_once: Function description.
    :param monkeypatch:
    :param basic_config_calls:
    :returns:
    """

    monkeypatch.setenv("LOG_LEVEL", "1")

    logging_config.configure_logging()
    logging_config.configure_logging()

    assert len(basic_config_calls) == 1
    assert basic_config_calls[0]["level"] == logging_config.logging.INFO
    assert basic_config_calls[0]["force"] is True
    assert "filename" not in basic_config_calls[0]


def test_verbose_forces_debug(
    basic_config_calls: List[Dict[str, Any]],
) -> None:
    logging_config.configure_logging(verbose=True)

    assert basic_config_calls[0]["level"] == logging_config.logging.DEBUG


def test_log_file_receives_records(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    basic_config_calls: List[Dict[str, Any]],
) -> None:
    log_path = tmp_path / "logs" / "aibom.log"
    monkeypatch.setenv("LOG_LEVEL", "2")
    monkeypatch.setenv("LOG_FILE", str(log_path))

    logging_config.configure_logging()

    assert basic_config_calls[0]["filename"] == log_path
    assert basic_config_calls[0]["filemode"] == "a"
    assert basic_config_calls[0]["level"] == logging_config.logging.DEBUG
    assert log_path.parent.is_dir()
