"""Load a published article back into an editable draft"""

import logging
from pathlib import Path

from draftpub.core.context import PublishContext
from draftpub.core.convert import article_id
from draftpub.core.editor import DRAFT_SUFFIX, create_block, parse_draft
from draftpub.core.errors import ArticleNotFoundError, DraftError, IndexFormatError
from draftpub.core.index import load_index
from draftpub.core.models import Asset, AssetKind, Draft, DraftMeta, IndexEntry
from draftpub.core.reconstruct import article_to_draft


logger = logging.getLogger(__name__)


def _stem(path: Path) -> str:
    name = path.name
    return name[: -len(DRAFT_SUFFIX)] if name.endswith(DRAFT_SUFFIX) else path.stem


def find_processed_draft(slug: str, ctx: PublishContext) -> Draft | None:
    """Newest archived draft that published slug, matched by article id or file name."""
    found = None
    for path in ctx.processed_files():
        try:
            draft = parse_draft(path.read_text(encoding="utf-8"), path.name)
        except (OSError, DraftError) as e:
            logger.warning("Skipping archived draft %s: %s", path.name, e)
            continue
        meta = draft.meta
        produced = article_id(meta, ctx.fallback_slug) if meta.title and meta.date else ""
        if slug in (produced, _stem(path)):
            found = draft
    return found


def _meta_from_entry(entry: IndexEntry) -> DraftMeta:
    return DraftMeta(
        title=entry.title,
        description=entry.description,
        date=entry.date,
        tags=", ".join(str(t) for t in entry.tags),
        cover_alt=entry.cover_alt,
    )


def _cover_from_entry(entry: IndexEntry) -> Asset:
    return Asset(
        filename=entry.cover.rsplit("/", 1)[-1] or "cover",
        data_url=entry.cover,
        kind=AssetKind.cover,
        alt=entry.cover_alt,
    )


def draft_from_article(entry: IndexEntry, ctx: PublishContext) -> Draft:
    """Reconstruct from the article file, trusting index metadata over front-matter."""
    path = ctx.article_path(entry.slug)
    try:
        draft = article_to_draft(path.read_text(encoding="utf-8"), entry.date)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to load %s, using index metadata only: %s", path.name, e)
        draft = Draft(blocks=[create_block()])
    draft.meta = _meta_from_entry(entry)
    if entry.cover and draft.cover is None:
        draft.assets.append(_cover_from_entry(entry))
    return draft


def load_for_editing(slug: str, ctx: PublishContext) -> Draft:
    """Archived draft if one exists, else a reconstruction of the published article."""
    draft = find_processed_draft(slug, ctx)
    if draft is not None:
        if not draft.blocks:
            draft.blocks = [create_block()]
        return draft

    try:
        entries = load_index(ctx)
    except IndexFormatError as e:
        logger.warning("Ignoring unreadable index: %s", e)
        entries = []
    entry = next((e for e in entries if e.slug == slug), None)
    if entry is None:
        raise ArticleNotFoundError(slug)
    return draft_from_article(entry, ctx)
