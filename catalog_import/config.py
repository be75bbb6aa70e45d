"""
catalog_import/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from catalog_import.contract import DEFAULT_PRODUCT_SHEETS

ENV_FILENAMES: tuple[str, ...] = (".env", ".env.local")


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


def load_env_files(project_root: Path | None = None) -> list[Path]:
    """
    Apply `KEY=VALUE` lines from `.env` then `.env.local` under `project_root`
    (the repository root by default) and return the files that were read.

    Variables already present in the process environment are never replaced,
    so `.env` wins over `.env.local` for keys both define.
    """

    root = project_root or Path(__file__).resolve().parents[1]
    loaded: list[Path] = []
    for filename in ENV_FILENAMES:
        env_path = root / filename
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None and parsed[0] not in os.environ:
                os.environ[parsed[0]] = parsed[1]
        loaded.append(env_path)
    return loaded


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
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


def _get_csv_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list; blank entries are dropped, order is kept.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    values = tuple(part.strip() for part in raw_value.split(",") if part.strip())
    return values or default


@dataclass(frozen=True)
class WorkbookImportSettings:
    """
    Runtime settings for workbook validation.
    """

    product_sheets: tuple[str, ...] = DEFAULT_PRODUCT_SHEETS
    max_upload_bytes: int = 10 * 1024 * 1024
    log_issues: bool = True
    max_logged_issues: int = 200


@lru_cache(maxsize=1)
def get_workbook_import_settings() -> WorkbookImportSettings:
    """
    Return cached workbook import settings from environment variables.
    """

    return WorkbookImportSettings(
        product_sheets=_get_csv_env("CATALOG_IMPORT_PRODUCT_SHEETS", DEFAULT_PRODUCT_SHEETS),
        max_upload_bytes=max(1, _get_int_env("CATALOG_IMPORT_MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
        log_issues=_get_bool_env("CATALOG_IMPORT_LOG_ISSUES", True),
        max_logged_issues=max(1, _get_int_env("CATALOG_IMPORT_MAX_LOGGED_ISSUES", 200)),
    )
