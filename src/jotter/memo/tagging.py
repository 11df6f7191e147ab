"""`#tag` token extraction and rewriting."""

from __future__ import annotations

import re

TAG_RE = re.compile(r"#([^\s#]+)")


def extract_tags(text: str) -> list[str]:
    """Return tags in first-occurrence order, without the leading '#'."""
    seen: dict[str, None] = {}
    for match in TAG_RE.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def _token_re(tag: str) -> re.Pattern[str]:
    # A token ends where TAG_RE would stop: whitespace, another '#', or end of text.
    return re.compile(rf"#{re.escape(tag)}(?![^\s#])")


def replace_tag(text: str, old: str, new: str) -> str:
    """Replace whole-token `#old` with `#new`; an empty `new` removes the token."""
    replacement = f"#{new}" if new else ""
    return _token_re(old).sub(lambda _m: replacement, text)
