"""Listing index regeneration from the published article set"""

import json
import logging
from pathlib import Path
from typing import Any

from draftpub.core.context import PublishContext
from draftpub.core.errors import IndexFormatError, PublishError
from draftpub.core.frontmatter import FrontmatterError, normalize_date, parse_frontmatter
from draftpub.core.models import IndexEntry


logger = logging.getLogger(__name__)

DEFAULT_READING_TIME = 3


def _reading_time(value: Any) -> int:
    """Integer front-matter readingTime, else the listing default."""
    if isinstance(value, bool):
        return DEFAULT_READING_TIME
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return DEFAULT_READING_TIME


def build_entry(slug: str, fm: dict[str, Any]) -> IndexEntry:
    """Summarize one article's front-matter, filling listing defaults."""
    title = fm.get("title")
    description = fm.get("description")
    cover_alt = fm.get("coverAlt")
    tags = fm.get("tags")
    return IndexEntry(
        slug=slug,
        title=slug if title is None else str(title),
        description="" if description is None else str(description),
        date=normalize_date(fm.get("date")),
        reading_time=_reading_time(fm.get("readingTime")),
        cover=fm.get("cover") if isinstance(fm.get("cover"), str) else None,
        cover_alt="" if cover_alt is None else str(cover_alt),
        tags=[str(t) for t in tags] if isinstance(tags, list) else [],
    )


def read_entry(path: Path) -> IndexEntry:
    """Index entry for an article file; unreadable front-matter yields defaults."""
    try:
        fm, _ = parse_frontmatter(path.read_text(encoding="utf-8"))
    except (FrontmatterError, OSError, UnicodeDecodeError) as e:
        logger.warning("Indexing %s with defaults: %s", path.name, e)
        fm = {}
    return build_entry(path.stem, fm)


def collect_entries(ctx: PublishContext) -> list[IndexEntry]:
    """All article entries, newest first; equal dates keep file-name order."""
    entries = [read_entry(p) for p in ctx.article_files()]
    return sorted(entries, key=lambda e: e.date, reverse=True)


def dump_index(entries: list[IndexEntry]) -> str:
    return json.dumps([e.model_dump(mode="json", by_alias=True) for e in entries], indent=2, ensure_ascii=False) + "\n"


def regenerate_index(ctx: PublishContext) -> list[IndexEntry]:
    """Rebuild the index file from scratch; safe to re-run at any time."""
    entries = collect_entries(ctx)
    try:
        ctx.index_file.parent.mkdir(parents=True, exist_ok=True)
        ctx.index_file.write_text(dump_index(entries), encoding="utf-8")
    except OSError as e:
        raise PublishError(f"Cannot write index {ctx.index_file}: {e}") from e
    logger.info("Updated %s (%d articles)", ctx.index_file, len(entries))
    return entries


def load_index(ctx: PublishContext) -> list[IndexEntry]:
    """Read the current index file; a missing file is an empty index."""
    if not ctx.index_file.exists():
        return []
    try:
        data = json.loads(ctx.index_file.read_text(encoding="utf-8") or "[]")
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        return [IndexEntry.model_validate(item) for item in data]
    except (OSError, ValueError) as e:
        raise IndexFormatError(f"Cannot read index {ctx.index_file}: {e}") from e
