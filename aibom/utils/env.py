from __future__ import annotations

"""Helpers for loading environment configuration."""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from aibom import config

_ENV_LOADED = False

_LOGGER = logging.getLogger(__name__)


def load_dotenv(dotenv_path: Union[str, Path] = ".env") -> None:
    """Load environment variables from a simple ``.env`` file if present."""
    global _ENV_LOADED
    if _ENV_LOADED:
        return

    path = Path(dotenv_path)
    if path.exists():
        for line in path.read_text().splitlines():
            parsed = _parse_line(line)
            if parsed:
                key, value = parsed
                os.environ.setdefault(key, value)

    _ENV_LOADED = True


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    if "=" not in stripped:
        return None

    key, value = stripped.split("=", 1)
    return (key.strip(), value.strip().strip('"').strip("'"))


def env_int(name: str, default: int) -> int:
    """Return a positive integer from the environment or ``default``."""

    load_dotenv()
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        _LOGGER.warning("Ignoring non-integer %s=%r", name, raw)
        return default
    if value <= 0:
        _LOGGER.warning("Ignoring non-positive %s=%r", name, raw)
        return default
    return value


def env_float(name: str, default: float) -> float:
    """Return a positive float from the environment or ``default``."""

    load_dotenv()
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        _LOGGER.warning("Ignoring non-numeric %s=%r", name, raw)
        return default
    if value <= 0:
        _LOGGER.warning("Ignoring non-positive %s=%r", name, raw)
        return default
    return value


def hf_endpoint() -> str:
    """Base URL of the Hugging Face Hub, without a trailing slash."""

    load_dotenv()
    raw = os.environ.get("HF_ENDPOINT", "").strip()
    return (raw or config.HF_BASE_URL).rstrip("/")


def metadata_timeout() -> float:
    return env_float("AIBOM_METADATA_TIMEOUT", config.METADATA_TIMEOUT_SECONDS)


def probe_timeout() -> float:
    return env_float("AIBOM_PROBE_TIMEOUT", config.PROBE_TIMEOUT_SECONDS)


def max_workers() -> int:
    return env_int("AIBOM_MAX_WORKERS", config.DEFAULT_MAX_WORKERS)
