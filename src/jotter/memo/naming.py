"""File naming: memo-<created_at>.md, where created_at is also the id."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass

MEMO_SUFFIX = ".md"
_FILE_NAME_RE = re.compile(r"^memo-(\d+)\.md$")


@dataclass(frozen=True)
class FileIdentity:
    id: str
    created_at: int


def now_ms() -> int:
    return int(time.time() * 1000)


def file_name(created_at: int) -> str:
    return f"memo-{created_at}{MEMO_SUFFIX}"


def is_memo_file_name(name: str) -> bool:
    return _FILE_NAME_RE.match(name) is not None


def parse_file_name(name: str) -> FileIdentity:
    """Recover (id, created_at) from a file name.

    Names that don't follow the pattern get a synthetic identity stamped
    with the current time rather than an error.
    """
    match = _FILE_NAME_RE.match(name)
    if match:
        ts = int(match.group(1))
        return FileIdentity(id=str(ts), created_at=ts)
    now = now_ms()
    return FileIdentity(id=str(now), created_at=now)
