"""Memo <-> markdown text.

A memo file is a `---` delimited block of plain `key: value` lines followed
by a blank line and the body:

    ---
    id: 1714552200123
    created: 2024-05-01T08:30:00.123Z
    updated: 2024-05-01T08:30:00.123Z
    tags: #work #idea
    ---

    Body text with #work and #idea

The block is not YAML (`#` would start a comment), so python-frontmatter is
driven through a small handler that reads and writes raw lines.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone

import frontmatter
from frontmatter.default_handlers import BaseHandler

from jotter.memo.naming import now_ms
from jotter.memo.record import MemoRecord
from jotter.memo.tagging import extract_tags

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


class MemoHandler(BaseHandler):
    """Front matter as flat `key: value` lines, split on the first colon."""

    FM_BOUNDARY = re.compile(r"^---\s*$", re.MULTILINE)
    START_DELIMITER = END_DELIMITER = "---"

    def load(self, fm: str) -> dict[str, str]:
        data: dict[str, str] = {}
        for line in fm.splitlines():
            key, _, value = line.partition(":")
            key, value = key.strip(), value.strip()
            if key and value:
                data[key] = value
        return data

    def export(self, metadata: dict, **kwargs) -> str:
        return "\n".join(f"{key}: {value}".rstrip() for key, value in metadata.items())


_HANDLER = MemoHandler()


# ── Timestamps ───────────────────────────────────────────────


def to_iso(ms: int) -> str:
    """Epoch millis -> `2024-05-01T08:30:00.123Z`."""
    dt = _EPOCH + timedelta(milliseconds=ms)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_iso(value: str) -> int | None:
    """ISO-8601 -> epoch millis. Naive values are local time. None if unparseable."""
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.astimezone()
        return (dt - _EPOCH) // _ONE_MS
    except (ValueError, OverflowError, OSError):
        return None


# ── Encode / decode ──────────────────────────────────────────


def encode(record: MemoRecord) -> str:
    """Render a memo file. The body is trimmed; `attachments` are not written."""
    post = frontmatter.Post(
        record.content.strip(),
        id=record.id,
        created=to_iso(record.created_at),
        updated=to_iso(record.updated_at),
        tags=" ".join(f"#{tag}" for tag in record.tags),
    )
    return frontmatter.dumps(post, handler=_HANDLER) + "\n"


def decode(text: str, fallback_id: str, fallback_created_at: int) -> MemoRecord:
    """Parse a memo file. Missing or malformed fields fall back, never raise.

    Tags always come from the body; the stored `tags:` line is only a
    rendering of them for people reading the file.
    """
    meta: dict[str, str] = {}
    body = text.strip()
    if _HANDLER.detect(text.lstrip()):
        meta, body = frontmatter.parse(text, handler=_HANDLER)

    created = from_iso(meta["created"]) if "created" in meta else None
    updated = from_iso(meta["updated"]) if "updated" in meta else None
    if "created" in meta and created is None:
        logger.debug("Bad created timestamp %r, using %d", meta["created"], fallback_created_at)

    return MemoRecord(
        id=meta.get("id") or fallback_id,
        content=body,
        created_at=created if created is not None else fallback_created_at,
        updated_at=updated if updated is not None else now_ms(),
        tags=extract_tags(body),
    )
