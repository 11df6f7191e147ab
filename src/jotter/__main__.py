"""Entry point: python -m jotter <command> [args]

- list [N]                   Newest N memos (default: display_count)
- today                      Memos created today
- add <text>                 Create a memo
- edit <id> <text>           Replace a memo's content
- rm <id>                    Delete a memo
- search <text>              Case-insensitive text search
- tag <name>                 Memos carrying #name
- tags                       Tag usage counts
- rename-tag <old> <new>     Rewrite #old as #new everywhere
- delete-tag <name>          Strip #name everywhere
- merge-tags <target> <name...>
"""

from __future__ import annotations

import asyncio
import logging
import sys

from jotter.config import JotterConfig, load_config
from jotter.dates import DAY, format_date, relative_time
from jotter.memo import MemoRecord, MemoStore, SearchQuery, StorageFailure, TagService
from jotter.memo.naming import now_ms

logger = logging.getLogger("jotter")


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _print_memos(memos: list[MemoRecord], config: JotterConfig) -> None:
    if not memos:
        print("(no memos)")
        return
    now = now_ms()
    for memo in memos:
        if now - memo.created_at < 7 * DAY:
            when = relative_time(memo.created_at, now)
        else:
            when = format_date(memo.created_at, config.date_format)
        first_line = memo.content.splitlines()[0] if memo.content else ""
        print(f"{memo.id}  {when}  {first_line}")


def _text(args: list[str]) -> str | None:
    """Join content args; None if there is nothing but whitespace."""
    text = " ".join(args).strip()
    return text or None


async def _run(cmd: str, args: list[str], config: JotterConfig) -> int:
    store = MemoStore(config.notes_dir)
    await store.initialize()
    tags = TagService(store)

    if cmd == "list":
        limit = int(args[0]) if args and args[0].isdigit() else config.display_count
        _print_memos(await store.list_all(limit, config.default_sort), config)
    elif cmd == "today":
        _print_memos(await store.search(SearchQuery.today()), config)
    elif cmd == "add":
        content = _text(args)
        if content is None:
            print("Memo content cannot be empty", file=sys.stderr)
            return 1
        memo = await store.create(content)
        print(memo.id)
    elif cmd == "edit" and args:
        content = _text(args[1:])
        if content is None:
            print("Memo content cannot be empty", file=sys.stderr)
            return 1
        if await store.update(args[0], content) is None:
            print(f"Memo {args[0]} not found", file=sys.stderr)
            return 1
    elif cmd == "rm" and args:
        if not await store.delete(args[0]):
            print(f"Memo {args[0]} not found", file=sys.stderr)
            return 1
    elif cmd == "search" and args:
        _print_memos(await store.search(SearchQuery(text=" ".join(args))), config)
    elif cmd == "tag" and args:
        _print_memos(await store.search(SearchQuery(tags=[args[0].lstrip("#")])), config)
    elif cmd == "tags":
        for tag in await tags.all_tags():
            print(f"#{tag.name}  {tag.count}")
    elif cmd in ("rename-tag", "delete-tag", "merge-tags") and args:
        if cmd == "rename-tag" and len(args) == 2:
            report = await tags.rename_tag(args[0], args[1])
        elif cmd == "delete-tag":
            report = await tags.delete_tag(args[0])
        elif cmd == "merge-tags" and len(args) >= 2:
            report = await tags.merge_tags(args[1:], args[0])
        else:
            return _usage()
        print(f"{report.count} memos updated")
        for memo_id, reason in report.failed.items():
            print(f"  failed {memo_id}: {reason}", file=sys.stderr)
        return 0 if report.ok else 1
    else:
        return _usage()
    return 0


def _usage() -> int:
    print(__doc__.strip(), file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        sys.exit(_usage())

    config = load_config()
    _setup_logging(config.log_level)

    try:
        code = asyncio.run(_run(argv[0], argv[1:], config))
    except StorageFailure as e:
        logger.error("%s", e)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
