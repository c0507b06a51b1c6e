"""Draft authoring operations: block/asset edits, validation and staged-file I/O"""

import base64
import json
import mimetypes
from datetime import date, datetime
from pathlib import Path
from typing import Literal, Optional

from pydantic import ValidationError

from draftpub.core.errors import DraftFormatError
from draftpub.core.models import Asset, AssetKind, Block, BlockType, Draft, DraftMeta
from draftpub.core.utils.slug import slugify


DRAFT_VERSION = 1
DRAFT_SUFFIX = ".draft.json"


# --- blocks ---

def create_block(type: BlockType = BlockType.paragraph, **overrides) -> Block:
    """A fresh block with a new id and empty content."""
    return Block(type=type, **overrides)


def new_draft(today: date | None = None) -> Draft:
    """An empty draft dated today with a single empty paragraph."""
    today = today or date.today()
    return Draft(meta=DraftMeta(date=today.isoformat()), blocks=[create_block()])


def _block(draft: Draft, block_id: str) -> Block:
    for block in draft.blocks:
        if block.id == block_id:
            return block
    raise KeyError(f"No block with id {block_id}")


def add_block(draft: Draft, type: BlockType) -> Block:
    """Append a block; image blocks start out pointing at the first inline asset."""
    block = create_block(type)
    if type == BlockType.image:
        inline = draft.inline_assets
        block.asset_id = inline[0].id if inline else None
    draft.blocks.append(block)
    return block


def update_block(draft: Draft, block_id: str, content: Optional[str] = None, asset_id: Optional[str] = None) -> Block:
    block = _block(draft, block_id)
    if content is not None:
        block.content = content
    if asset_id is not None:
        block.asset_id = asset_id
    return block


def move_block(draft: Draft, index: int, direction: Literal["up", "down"]) -> bool:
    """Swap a block with its neighbour; False when it is already at that edge."""
    target = index - 1 if direction == "up" else index + 1
    if not 0 <= index < len(draft.blocks) or not 0 <= target < len(draft.blocks):
        return False
    draft.blocks[index], draft.blocks[target] = draft.blocks[target], draft.blocks[index]
    return True


def remove_block(draft: Draft, block_id: str) -> bool:
    """Remove a block unless it is the last one left."""
    if len(draft.blocks) <= 1:
        return False
    before = len(draft.blocks)
    draft.blocks = [b for b in draft.blocks if b.id != block_id]
    return len(draft.blocks) < before


# --- assets ---

def set_cover(draft: Draft, filename: str, data_url: str) -> Asset:
    """Attach a cover, replacing any previous one; its alt follows meta.coverAlt."""
    cover = Asset(filename=filename, data_url=data_url, kind=AssetKind.cover, alt=draft.meta.cover_alt)
    draft.assets = [a for a in draft.assets if a.kind != AssetKind.cover] + [cover]
    return cover


def remove_cover(draft: Draft) -> None:
    draft.assets = [a for a in draft.assets if a.kind != AssetKind.cover]


def set_cover_alt(draft: Draft, alt: str) -> None:
    """Update meta.coverAlt and keep the cover asset's alt in sync."""
    draft.meta.cover_alt = alt
    cover = draft.cover
    if cover is not None:
        cover.alt = alt


def add_inline_asset(draft: Draft, filename: str, data_url: str, alt: str = "") -> Asset:
    asset = Asset(filename=filename, data_url=data_url, kind=AssetKind.inline, alt=alt)
    draft.assets.append(asset)
    return asset


def set_asset_alt(draft: Draft, asset_id: str, alt: str) -> None:
    for asset in draft.assets:
        if asset.id == asset_id:
            asset.alt = alt
            return
    raise KeyError(f"No asset with id {asset_id}")


def remove_inline_asset(draft: Draft, asset_id: str) -> None:
    """Drop an asset and clear every image block that referenced it."""
    draft.assets = [a for a in draft.assets if a.id != asset_id]
    for block in draft.blocks:
        if block.asset_id == asset_id:
            block.asset_id = None


def file_to_data_url(path: Path) -> str:
    """Encode an image file the way a browser FileReader would."""
    mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{payload}"


# --- saving ---

def can_save(draft: Draft) -> bool:
    """A draft is saveable once it has a title and some real content."""
    if not draft.meta.title.strip():
        return False
    inline_ids = {a.id for a in draft.inline_assets}
    for block in draft.blocks:
        if block.type == BlockType.image:
            if block.asset_id and block.asset_id in inline_ids:
                return True
        elif block.content.strip():
            return True
    return False


def draft_filename(draft: Draft, now: datetime | None = None) -> str:
    """'<date>-<HHMM>-<slug>.draft.json', so re-saves of one article sort by time."""
    now = now or datetime.now()
    day = draft.meta.date or now.date().isoformat()
    slug = slugify(draft.meta.title or "untitled") or "draft"
    return f"{day}-{now:%H%M}-{slug}{DRAFT_SUFFIX}"


def serialize_draft(draft: Draft, now: datetime | None = None) -> str:
    """Staged draft JSON with generatedAt and format version."""
    now = now or datetime.now()
    data = draft.model_dump(mode="json", by_alias=True)
    data["generatedAt"] = now.isoformat()
    data["version"] = DRAFT_VERSION
    return json.dumps(data, indent=2, ensure_ascii=False)


def save_draft(draft: Draft, drafts_dir: Path, now: datetime | None = None) -> Path:
    """Write the draft into the staging directory and return its path."""
    now = now or datetime.now()
    drafts_dir.mkdir(parents=True, exist_ok=True)
    path = drafts_dir / draft_filename(draft, now)
    path.write_text(serialize_draft(draft, now) + "\n", encoding="utf-8")
    return path


def parse_draft(raw: str, name: str = "<draft>") -> Draft:
    """Validate staged draft JSON; extra keys such as generatedAt are ignored."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DraftFormatError(name, f"invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise DraftFormatError(name, f"expected an object, got {type(data).__name__}")
    for key, default in (("meta", {}), ("blocks", []), ("assets", [])):
        if data.get(key) is None:
            data[key] = default
    try:
        return Draft.model_validate(data)
    except ValidationError as e:
        raise DraftFormatError(name, str(e)) from e
