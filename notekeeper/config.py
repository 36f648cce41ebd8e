"""
Client configuration for the notes API.

Centralizes connection and debug flags so callers can tune defaults without
touching core logic. ``ApiConfig.from_env()`` reads NOTEKEEPER_* variables
and falls back to the module defaults on anything it cannot parse.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080/api"
DEFAULT_TIMEOUT = 10.0
DEFAULT_HEALTH_TIMEOUT = 5.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Ignoring malformed %s=%r", name, raw)
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring malformed %s=%r", name, raw)
        return default


def _env_flag(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ApiConfig:
    # Connection
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    # Reachability checks are kept short so a dead backend is reported quickly.
    health_timeout: float = DEFAULT_HEALTH_TIMEOUT

    # Logging/debug: dump failed exchanges to disk
    debug_dump: bool = False
    debug_dir: str = os.path.join("workspace", "notekeeper_debug")
    debug_max_bytes: int = 524288

    @classmethod
    def from_env(cls, base_url: Optional[str] = None) -> "ApiConfig":
        cfg = cls(
            base_url=os.getenv("NOTEKEEPER_BASE_URL") or DEFAULT_BASE_URL,
            timeout=_env_float("NOTEKEEPER_TIMEOUT", DEFAULT_TIMEOUT),
            health_timeout=_env_float(
                "NOTEKEEPER_HEALTH_TIMEOUT", DEFAULT_HEALTH_TIMEOUT
            ),
            debug_dump=_env_flag("NOTEKEEPER_DEBUG"),
            debug_max_bytes=_env_int("NOTEKEEPER_DEBUG_MAX_BYTES", 524288),
        )
        if base_url:
            cfg = cfg.with_base_url(base_url)
        return cfg

    def with_base_url(self, base_url: str) -> "ApiConfig":
        return replace(self, base_url=base_url.rstrip("/"))
