"""CLI command implementations"""

from datetime import date
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from draftpub.config import Settings, load_config
from draftpub.core.context import PublishContext
from draftpub.core.editor import (
    add_block,
    add_inline_asset,
    can_save,
    file_to_data_url,
    new_draft,
    parse_draft,
    save_draft,
    set_cover,
    set_cover_alt,
    update_block,
)
from draftpub.core.errors import DraftpubError, PublishError
from draftpub.core.index import regenerate_index
from draftpub.core.loader import load_for_editing
from draftpub.core.models import BlockType
from draftpub.core.pipeline import run_sync
from draftpub.core.preview import preview_html, preview_markdown
from draftpub.core.utils.logger import setup_logging
from draftpub.core.utils.slug import slugify


RootOpt = Annotated[Optional[str], typer.Option("--root", help="Site root directory")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def _context(root: Optional[str], **overrides) -> PublishContext:
    return PublishContext.from_settings(_settings(overrides={"root_dir": root, **overrides}))


def sync_cmd(
    root: RootOpt = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="Article format: md or mdx")] = None,
    ):
    """Publish staged drafts as articles, archive them, and rebuild the index."""
    ctx = _context(root, article_format=fmt)
    try:
        report = run_sync(ctx)
    except PublishError as e:
        _fail("Sync failed", e)
    for draft_path, article_path in report.published:
        typer.echo(f"  {draft_path.name} -> {article_path}")
    for draft_path, error in report.failed:
        typer.echo(f"  failed: {error}", err=True)
    typer.echo(
        f"Sync complete - "
        f"{len(report.published)} published, "
        f"{len(report.failed)} failed, "
        f"{len(report.index)} indexed"
    )


def index_cmd(root: RootOpt = None):
    """Rebuild the listing index from the published articles."""
    ctx = _context(root)
    try:
        entries = regenerate_index(ctx)
    except PublishError as e:
        _fail("Index failed", e)
    typer.echo(f"Indexed {len(entries)} article(s) to {ctx.index_file}")


def new_cmd(
    title: Annotated[str, typer.Argument(help="Article title")],
    day: Annotated[Optional[str], typer.Option("--date", help="Publish date (YYYY-MM-DD); defaults to today")] = None,
    description: Annotated[str, typer.Option("--description", help="Listing description")] = "",
    tags: Annotated[str, typer.Option("--tags", help="Comma-separated tags")] = "",
    body: Annotated[Optional[Path], typer.Option("--body", exists=True, readable=True, help="Text file; blank-line separated paragraphs")] = None,
    cover: Annotated[Optional[Path], typer.Option("--cover", exists=True, readable=True, help="Cover image")] = None,
    cover_alt: Annotated[str, typer.Option("--cover-alt", help="Cover alt text")] = "",
    images: Annotated[Optional[List[Path]], typer.Option("--image", exists=True, readable=True, help="Inline image (repeatable)")] = None,
    root: RootOpt = None,
    ):
    """Author a new staged draft from the command line."""
    ctx = _context(root)
    try:
        draft = new_draft(date.fromisoformat(day) if day else None)
    except ValueError as e:
        _fail(f"Invalid --date '{day}'", e)
    draft.meta.title = title
    draft.meta.description = description
    draft.meta.tags = tags
    set_cover_alt(draft, cover_alt)

    if body is not None:
        paragraphs = [p.strip() for p in body.read_text(encoding="utf-8").split("\n\n") if p.strip()]
        if paragraphs:
            update_block(draft, draft.blocks[0].id, content=paragraphs[0])
        for text in paragraphs[1:]:
            update_block(draft, add_block(draft, BlockType.paragraph).id, content=text)
    if cover is not None:
        set_cover(draft, cover.name, file_to_data_url(cover))
    for image in images or []:
        asset = add_inline_asset(draft, image.name, file_to_data_url(image))
        update_block(draft, add_block(draft, BlockType.image).id, asset_id=asset.id)

    if not can_save(draft):
        _fail("Draft needs a title and some content (--body or --image)")
    path = save_draft(draft, ctx.drafts_dir)
    typer.echo(f"Saved draft to {path}")


def edit_cmd(
    slug: Annotated[str, typer.Argument(help="Article slug, e.g. 2024-05-01-my-post")],
    root: RootOpt = None,
    ):
    """Stage a new editable draft for an already published article."""
    ctx = _context(root)
    try:
        draft = load_for_editing(slug, ctx)
    except DraftpubError as e:
        _fail(str(e))
    path = save_draft(draft, ctx.drafts_dir)
    typer.echo(f"Staged {len(draft.blocks)} block(s) for editing at {path}")


def preview_cmd(
    draft_file: Annotated[Path, typer.Argument(exists=True, readable=True, help="Staged draft JSON")],
    html: Annotated[bool, typer.Option("--html", help="Render HTML instead of markdown")] = False,
    ):
    """Print the body a draft would publish."""
    settings = _settings()
    try:
        draft = parse_draft(draft_file.read_text(encoding="utf-8"), draft_file.name)
    except DraftpubError as e:
        _fail(str(e))
    render = preview_html if html else preview_markdown
    typer.echo(render(draft, settings.image_placeholder))


def slug_cmd(text: Annotated[str, typer.Argument(help="Free text to slugify")]):
    """Print the slug derived from text."""
    typer.echo(slugify(text))


def init_cmd(root: RootOpt = None):
    """Create the content, draft, archive and asset directories."""
    ctx = _context(root)
    for d in (ctx.content_dir, ctx.drafts_dir, ctx.processed_dir, ctx.assets_dir):
        d.mkdir(parents=True, exist_ok=True)
    typer.echo(f"Site layout initialized at: {ctx.content_dir}")
