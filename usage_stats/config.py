"""
usage_stats/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class UsageIngestionSettings:
    """
    Runtime settings for grid parsing and upload handling.
    """

    log_skipped_rows: bool = True
    max_skipped_row_details: int = 200


@dataclass(frozen=True)
class GridReaderSettings:
    """
    Runtime settings for spreadsheet decoding.
    """

    max_file_bytes: int = 20 * 1024 * 1024
    drop_blank_rows: bool = True


@lru_cache(maxsize=1)
def get_usage_ingestion_settings() -> UsageIngestionSettings:
    """
    Return cached ingestion settings from environment variables.
    """

    return UsageIngestionSettings(
        log_skipped_rows=_get_bool_env("USAGE_LOG_SKIPPED_ROWS", True),
        max_skipped_row_details=max(1, _get_int_env("USAGE_MAX_SKIPPED_ROW_DETAILS", 200)),
    )


@lru_cache(maxsize=1)
def get_grid_reader_settings() -> GridReaderSettings:
    """
    Return cached grid reader settings from environment variables.
    """

    return GridReaderSettings(
        max_file_bytes=max(1, _get_int_env("USAGE_MAX_FILE_BYTES", 20 * 1024 * 1024)),
        drop_blank_rows=_get_bool_env("USAGE_DROP_BLANK_ROWS", True),
    )


def get_log_level() -> str:
    """
    Return the configured root log level name.
    """

    return _get_str_env("LOG_LEVEL", "INFO").upper()
