"""Configuration loading from environment variables and jotter.toml."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from jotter.memo.query import SORT_KEYS, SortKey

logger = logging.getLogger(__name__)

_DEFAULT_NOTES_DIR = Path.home() / ".jotter" / "memos"
_CONFIG_FILENAME = "jotter.toml"


@dataclass
class JotterConfig:
    """Settings the memo engine takes from its host."""

    notes_dir: Path = _DEFAULT_NOTES_DIR
    date_format: str = "%Y-%m-%d %H:%M:%S"
    display_count: int = 50
    default_sort: SortKey = "created_at"
    log_level: str = "INFO"


def _sort_key(value: str) -> SortKey:
    if value in SORT_KEYS:
        return value  # type: ignore[return-value]
    logger.warning("Unknown sort key %r, falling back to created_at", value)
    return "created_at"


def load_config(config_path: Path | None = None) -> JotterConfig:
    """Load configuration from environment variables and optional jotter.toml.

    Priority: environment variables > jotter.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.jotter/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".jotter" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    notes_dir = os.getenv("JOTTER_NOTES_DIR", file_data.get("notes_dir"))
    return JotterConfig(
        notes_dir=Path(notes_dir).expanduser() if notes_dir else _DEFAULT_NOTES_DIR,
        date_format=os.getenv(
            "JOTTER_DATE_FORMAT", file_data.get("date_format", "%Y-%m-%d %H:%M:%S")
        ),
        display_count=int(os.getenv("JOTTER_DISPLAY_COUNT", file_data.get("display_count", 50))),
        default_sort=_sort_key(
            os.getenv("JOTTER_DEFAULT_SORT", file_data.get("default_sort", "created_at"))
        ),
        log_level=os.getenv("JOTTER_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
