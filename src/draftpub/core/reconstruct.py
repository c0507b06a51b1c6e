"""Best-effort article -> draft reconstruction.

Each body line is classified on its own by ``classify_line`` into a tagged
``LineOutcome``; ``BlockBuilder`` is a two-state machine (scanning vs.
accumulating a paragraph) that turns the outcome stream into blocks.

The mapping is lossy by nature:
  - consecutive text lines fold into a single paragraph block
  - ``# `` headings fold into heading2
  - unknown markup is either dropped or kept as plain text
Nothing here raises on article content; the worst case is a draft holding a
single empty paragraph.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

from draftpub.core.frontmatter import FrontmatterError, normalize_date, parse_frontmatter, split_frontmatter
from draftpub.core.models import Asset, AssetKind, Block, BlockType, Draft, DraftMeta


logger = logging.getLogger(__name__)

COMPONENT_START_RE = re.compile(r'^<[A-Z][a-zA-Z0-9]*(\s|>|/)')
COMPONENT_TAG_RE = re.compile(r'</?[A-Z][a-zA-Z0-9]*[^>]*>')
IMAGE_RE = re.compile(r'^!\[(.*?)\]\((.*?)\)$')
CAPTION_RE = re.compile(r'^\*(.*)\*$')
CLOSING_RE = re.compile(r'^[}\])]+[,;]?$')


class LineKind(str, Enum):
    blank = "blank"
    skip = "skip"
    heading2 = "heading2"
    heading3 = "heading3"
    image = "image"
    text = "text"


@dataclass(frozen=True)
class LineOutcome:
    kind: LineKind
    text: str = ""                  # heading/paragraph text, or image alt
    path: str = ""                  # image only


def strip_components(line: str) -> str:
    """Drop capitalized component tags and collapse whitespace."""
    return " ".join(COMPONENT_TAG_RE.sub(" ", line).split())


def classify_line(raw_line: str) -> LineOutcome:
    """Classify a single body line without looking at its neighbours."""
    line = raw_line.strip()
    if not line:
        return LineOutcome(LineKind.blank)
    if line.startswith("import "):
        return LineOutcome(LineKind.skip)
    if COMPONENT_START_RE.match(line) and not strip_components(line):
        return LineOutcome(LineKind.skip)
    if line.startswith("## "):
        return LineOutcome(LineKind.heading2, line[3:].strip())
    if line.startswith("### "):
        return LineOutcome(LineKind.heading3, line[4:].strip())
    if line.startswith("# "):
        return LineOutcome(LineKind.heading2, line[2:].strip())
    m = IMAGE_RE.match(line)
    if m:
        return LineOutcome(LineKind.image, m.group(1).strip(), m.group(2).strip())
    if CLOSING_RE.match(line):
        return LineOutcome(LineKind.skip)
    text = strip_components(line)
    return LineOutcome(LineKind.text, text) if text else LineOutcome(LineKind.skip)


def caption_of(raw_line: str) -> Optional[str]:
    """Caption text of an italic-only line, else None."""
    m = CAPTION_RE.match(raw_line.strip())
    return m.group(1).strip() if m else None


class BuilderState(str, Enum):
    scanning = "scanning"
    paragraph = "paragraph"


class BlockBuilder:
    """Accumulates blocks and inline assets from classified lines."""

    def __init__(self):
        self.state = BuilderState.scanning
        self.blocks: list[Block] = []
        self.assets: list[Asset] = []
        self._buffer: list[str] = []
        self._by_path: dict[str, Asset] = {}

    def flush(self) -> None:
        if self.state == BuilderState.paragraph:
            text = " ".join(self._buffer).strip()
            if text:
                self.blocks.append(Block(type=BlockType.paragraph, content=text))
        self._buffer = []
        self.state = BuilderState.scanning

    def accumulate(self, text: str) -> None:
        self._buffer.append(text)
        self.state = BuilderState.paragraph

    def heading(self, kind: BlockType, text: str) -> None:
        self.flush()
        self.blocks.append(Block(type=kind, content=text))

    def image(self, path: str, alt: str, caption: str = "") -> None:
        self.flush()
        self.blocks.append(Block(type=BlockType.image, content=caption, asset_id=self.inline_asset(path, alt)))

    def inline_asset(self, path: str, alt: str) -> str:
        """Id of the inline asset for path; the first non-empty alt wins."""
        existing = self._by_path.get(path)
        if existing:
            if not existing.alt and alt:
                existing.alt = alt
            return existing.id
        asset = Asset(filename=path.rsplit("/", 1)[-1] or path, data_url=path, kind=AssetKind.inline, alt=alt)
        self._by_path[path] = asset
        self.assets.append(asset)
        return asset.id

    def finish(self) -> list[Block]:
        self.flush()
        if not self.blocks:
            self.blocks.append(Block(type=BlockType.paragraph))
        return self.blocks


def body_to_blocks(body: str) -> tuple[list[Block], list[Asset]]:
    """Rebuild blocks and inline assets from article body text."""
    lines = body.split("\n")
    builder = BlockBuilder()
    i = 0
    while i < len(lines):
        outcome = classify_line(lines[i])
        if outcome.kind == LineKind.blank:
            builder.flush()
        elif outcome.kind == LineKind.heading2:
            builder.heading(BlockType.heading2, outcome.text)
        elif outcome.kind == LineKind.heading3:
            builder.heading(BlockType.heading3, outcome.text)
        elif outcome.kind == LineKind.image:
            caption = ""
            cursor = i + 1
            while cursor < len(lines) and not lines[cursor].strip():
                cursor += 1
            if cursor < len(lines):
                found = caption_of(lines[cursor])
                if found is not None:
                    caption = found
                    i = cursor
            builder.image(outcome.path, outcome.text, caption)
        elif outcome.kind == LineKind.text:
            builder.accumulate(outcome.text)
        i += 1
    return builder.finish(), builder.assets


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def meta_from_frontmatter(fm: dict[str, Any], fallback_date: str) -> DraftMeta:
    """Editable draft metadata; tags come back as a comma-separated string."""
    tags = fm.get("tags")
    if isinstance(tags, list):
        tags = ", ".join(str(t) for t in tags)
    return DraftMeta(
        title=_text(fm.get("title")),
        description=_text(fm.get("description")),
        date=normalize_date(fm.get("date")) or fallback_date,
        tags=_text(tags),
        cover_alt=_text(fm.get("coverAlt")),
    )


def article_to_draft(text: str, fallback_date: str | None = None) -> Draft:
    """Reconstruct an approximate, always-editable draft from article text."""
    fallback_date = fallback_date or date.today().isoformat()
    try:
        fm, body = parse_frontmatter(text)
    except FrontmatterError as e:
        logger.warning("Ignoring article front-matter: %s", e)
        fm, body = {}, split_frontmatter(text)[1]

    assets: list[Asset] = []
    cover = fm.get("cover")
    if isinstance(cover, str) and cover:
        assets.append(Asset(
            filename=cover.rsplit("/", 1)[-1] or "cover",
            data_url=cover,
            kind=AssetKind.cover,
            alt=_text(fm.get("coverAlt")),
        ))

    blocks, inline = body_to_blocks(body)
    return Draft(meta=meta_from_frontmatter(fm, fallback_date), blocks=blocks, assets=assets + inline)
