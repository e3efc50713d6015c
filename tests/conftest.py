"""
AIBOM Generator Repository
Introductory remarks: This module is part of the AIBOM Generator codebase.

Shared fixtures for the test suite.
"""

from __future__ import annotations

import pytest

from aibom import logging_config
from aibom.utils import env


@pytest.fixture(autouse=True)
def _isolated_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    _isolated_runtime_env: Keep tests silent and independent of a local .env.
    :param monkeypatch:
    :returns:
    """

    monkeypatch.setattr(env, "_ENV_LOADED", True)
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setenv("LOG_LEVEL", "0")
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("HF_ENDPOINT", raising=False)
    monkeypatch.delenv("AIBOM_MAX_WORKERS", raising=False)
    monkeypatch.delenv("AIBOM_METADATA_TIMEOUT", raising=False)
    monkeypatch.delenv("AIBOM_PROBE_TIMEOUT", raising=False)
