"""The memo record."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class MemoRecord:
    """A single memo as read from (or about to be written to) disk."""

    id: str
    content: str
    created_at: int
    updated_at: int
    tags: list[str] = field(default_factory=list)
    attachments: list[str] = field(default_factory=list)
    # Set only on records materialised from storage.
    linked_file: Path | None = field(default=None, compare=False)
