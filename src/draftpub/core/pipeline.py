"""Sync pipeline: staged drafts -> articles + assets -> archive -> index"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from draftpub.core.assets import materialize_asset
from draftpub.core.context import PublishContext
from draftpub.core.convert import (
    article_id,
    build_frontmatter,
    normalize_tags,
    reading_time,
    render_article,
    render_body,
    require_fields,
)
from draftpub.core.editor import parse_draft
from draftpub.core.errors import AssetPayloadError, DraftError, DraftFormatError, PublishError
from draftpub.core.index import regenerate_index
from draftpub.core.models import Draft, IndexEntry, ResolvedAsset


logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Outcome of one sync run."""
    published: list[tuple[Path, Path]] = field(default_factory=list)     # (draft, article)
    failed:    list[tuple[Path, DraftError]] = field(default_factory=list)
    index:     list[IndexEntry] = field(default_factory=list)


def materialize_assets(draft: Draft, slug: str, ctx: PublishContext) -> tuple[dict[str, ResolvedAsset], ResolvedAsset | None]:
    """Materialize the cover and inline assets; malformed payloads are logged and dropped."""
    resolved: dict[str, ResolvedAsset] = {}
    cover = draft.cover
    if cover is not None:
        try:
            resolved[cover.id] = materialize_asset(cover, slug, ctx, "cover")
        except AssetPayloadError as e:
            logger.warning("Dropping cover of %s: %s", slug, e)

    for n, asset in enumerate(draft.inline_assets, start=1):
        try:
            resolved[asset.id] = materialize_asset(asset, slug, ctx, f"image-{n}")
        except AssetPayloadError as e:
            logger.warning("Dropping inline asset of %s: %s", slug, e)

    return resolved, resolved.get(cover.id) if cover is not None else None


def archive_draft(draft_path: Path, raw: str, processed_dir: Path) -> Path:
    """Move a consumed draft into the archive; copy-then-delete if the move fails."""
    target = processed_dir / draft_path.name
    try:
        processed_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PublishError(f"Cannot create archive {processed_dir}: {e}") from e
    try:
        draft_path.replace(target)
    except OSError:
        try:
            target.write_text(raw, encoding="utf-8")
            draft_path.unlink()
        except OSError as e:
            raise PublishError(f"Cannot archive draft {draft_path.name} to {target}: {e}") from e
    return target


def _read_draft(draft_path: Path) -> tuple[str, Draft]:
    try:
        raw = draft_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DraftFormatError(draft_path.name, f"cannot be read ({e})") from e
    return raw, parse_draft(raw, draft_path.name)


def process_draft(draft_path: Path, ctx: PublishContext) -> Path:
    """Convert one staged draft into an article file and archive it. Returns the article path."""
    raw, draft = _read_draft(draft_path)
    require_fields(draft, draft_path.name)

    slug = article_id(draft.meta, ctx.fallback_slug)
    article_path = ctx.article_path(slug)
    if article_path.exists():
        logger.warning("Overwriting existing article %s", article_path.name)

    resolved, cover = materialize_assets(draft, slug, ctx)
    resolve = resolved.get
    fm = build_frontmatter(
        draft.meta,
        normalize_tags(draft.meta.tags),
        reading_time(draft.blocks, resolve, ctx.words_per_minute),
        cover,
    )
    body = render_body(draft.blocks, resolve, ctx.image_placeholder)

    try:
        article_path.parent.mkdir(parents=True, exist_ok=True)
        article_path.write_text(render_article(fm, body), encoding="utf-8")
    except OSError as e:
        raise PublishError(f"Cannot write article {article_path}: {e}") from e

    archive_draft(draft_path, raw, ctx.processed_dir)
    logger.info("Processed draft %s -> %s", draft_path.name, article_path)
    return article_path


def run_sync(ctx: PublishContext) -> SyncReport:
    """Publish every staged draft, then rebuild the index once.

    Per-draft failures are logged and reported; PublishError propagates.
    """
    report = SyncReport()
    drafts = ctx.draft_files()
    if not drafts:
        logger.info("No draft files found. Regenerating index...")

    for draft_path in drafts:
        try:
            report.published.append((draft_path, process_draft(draft_path, ctx)))
        except DraftError as e:
            logger.error("Skipping %s: %s", draft_path.name, e)
            report.failed.append((draft_path, e))

    report.index = regenerate_index(ctx)
    return report
