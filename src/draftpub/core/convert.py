"""Draft -> article conversion: tags, reading time, body text and front-matter"""

import math
from typing import Callable, Optional

from draftpub.core.errors import MissingFieldError
from draftpub.core.frontmatter import render_frontmatter
from draftpub.core.models import ArticleMeta, Block, BlockType, Draft, DraftMeta, ResolvedAsset
from draftpub.core.utils.slug import slugify


Resolver = Callable[[str], Optional[ResolvedAsset]]

DEFAULT_PLACEHOLDER = "Изображение"


def require_fields(draft: Draft, name: str) -> None:
    """Raise MissingFieldError unless the draft carries a title and a date."""
    for field in ("title", "date"):
        if not getattr(draft.meta, field).strip():
            raise MissingFieldError(name, field)


def article_id(meta: DraftMeta, fallback: str = "material") -> str:
    """Return '<date>-<slug>'; drafts sharing both collide on the same article."""
    return f"{meta.date}-{slugify(meta.title) or fallback}"


def normalize_tags(raw: str) -> list[str]:
    """Split a comma-separated tag string into lowercase, hyphenated tags."""
    if not raw:
        return []
    tags = (t.strip() for t in raw.split(","))
    return ["-".join(t.lower().split()) for t in tags if t]


def _resolve(block: Block, resolve: Resolver) -> ResolvedAsset | None:
    return resolve(block.asset_id) if block.asset_id else None


def reading_time(blocks: list[Block], resolve: Resolver, words_per_minute: int = 200) -> int:
    """Estimated minutes to read, rounded half up, never below one."""
    parts = []
    for block in blocks:
        if block.type == BlockType.image:
            asset = _resolve(block, resolve)
            parts.append(f"{asset.alt if asset else ''} {block.content}")
        else:
            parts.append(block.content)
    words = len(" ".join(parts).split())
    return max(1, math.floor(words / words_per_minute + 0.5))


def render_block(block: Block, resolve: Resolver, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Render one block as markdown; '' means the block is left out of the body."""
    content = block.content.strip()
    if block.type == BlockType.heading2:
        return f"## {content}" if content else ""
    if block.type == BlockType.heading3:
        return f"### {content}" if content else ""
    if block.type == BlockType.image:
        asset = _resolve(block, resolve)
        if asset is None:
            return ""
        alt = (asset.alt or content).strip() or placeholder
        caption = f"\n\n*{content}*" if content else ""
        return f"![{alt}]({asset.path}){caption}"
    return content


def render_body(blocks: list[Block], resolve: Resolver, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Join the rendered blocks with blank lines, skipping empty ones."""
    rendered = (render_block(b, resolve, placeholder) for b in blocks)
    return "\n\n".join(r for r in rendered if r)


def build_frontmatter(
    meta: DraftMeta,
    tags: list[str],
    minutes: int,
    cover: ResolvedAsset | None = None,
    ) -> ArticleMeta:
    """Assemble article front-matter; cover keys only appear for a materialized cover."""
    fm = ArticleMeta(
        title=meta.title,
        description=meta.description or "",
        date=meta.date,
        tags=tags,
        reading_time=minutes,
    )
    if cover is not None:
        fm.cover = cover.path
        fm.cover_alt = cover.alt or meta.cover_alt or None
    return fm


def render_article(fm: ArticleMeta, body: str) -> str:
    """Full article file text: YAML header, blank line, body."""
    return render_frontmatter(fm.to_frontmatter(), body)
