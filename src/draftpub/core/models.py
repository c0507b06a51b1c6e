"""Draft, article and index models shared by the forward and reverse pipelines"""

from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id() -> str:
    return str(uuid4())


class BlockType(str, Enum):
    paragraph = "paragraph"
    heading2 = "heading2"
    heading3 = "heading3"
    image = "image"


class AssetKind(str, Enum):
    cover = "cover"
    inline = "inline"


class _CamelModel(BaseModel):
    """Accepts both the camelCase JSON keys and the python attribute names."""
    model_config = ConfigDict(populate_by_name=True)


class Block(_CamelModel):
    """A single ordered content unit of a draft."""
    id:       str = Field(default_factory=new_id)
    type:     BlockType = BlockType.paragraph
    content:  str = ""              # caption for image blocks
    asset_id: Optional[str] = Field(default=None, alias="assetId")

    @field_validator("content", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class Asset(_CamelModel):
    """An image attached to a draft: a data URL payload or an already-public path."""
    id:       str = Field(default_factory=new_id)
    filename: str = ""
    data_url: str = Field(default="", alias="dataUrl")
    kind:     AssetKind = AssetKind.inline
    alt:      Optional[str] = None


class DraftMeta(_CamelModel):
    title:       str = ""
    description: str = ""
    date:        str = ""           # ISO YYYY-MM-DD
    tags:        str = ""           # comma-separated, as typed in the editor
    cover_alt:   str = Field(default="", alias="coverAlt")

    @field_validator("title", "description", "date", "cover_alt", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def _join_tag_list(cls, v):
        if v is None:
            return ""
        if isinstance(v, list):
            return ", ".join(str(t) for t in v)
        return v


class Draft(BaseModel):
    """Authoring-time document: metadata, ordered blocks and attached assets."""
    meta:   DraftMeta = Field(default_factory=DraftMeta)
    blocks: list[Block] = Field(default_factory=list)
    assets: list[Asset] = Field(default_factory=list)

    @property
    def cover(self) -> Asset | None:
        return next((a for a in self.assets if a.kind == AssetKind.cover), None)

    @property
    def inline_assets(self) -> list[Asset]:
        return [a for a in self.assets if a.kind == AssetKind.inline]


class ResolvedAsset(BaseModel):
    """An asset after materialization: the public path the article references."""
    path:     str
    alt:      str = ""
    filename: str = ""


class ArticleMeta(_CamelModel):
    """Article front-matter, serialized in declaration order."""
    title:        str
    description:  str = ""
    date:         str
    tags:         list[str] = Field(default_factory=list)
    reading_time: int = Field(default=1, alias="readingTime")
    cover:        Optional[str] = None
    cover_alt:    Optional[str] = Field(default=None, alias="coverAlt")

    def to_frontmatter(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class IndexEntry(_CamelModel):
    """Denormalized listing summary of one published article."""
    slug:         str
    title:        str
    description:  str = ""
    date:         str = ""
    reading_time: int = Field(default=3, alias="readingTime")
    cover:        Optional[str] = None
    cover_alt:    str = Field(default="", alias="coverAlt")
    tags:         list = Field(default_factory=list)
