"""Explicit locations and conversion options passed to every pipeline step"""

from dataclasses import dataclass
from pathlib import Path

from draftpub.config import Settings


@dataclass(frozen=True)
class PublishContext:
    """Resolved directories plus the knobs the converter needs."""
    content_dir:       Path
    drafts_dir:        Path
    processed_dir:     Path
    assets_dir:        Path
    index_file:        Path
    assets_url:        str = "/news-assets"
    article_format:    str = "mdx"
    words_per_minute:  int = 200
    image_placeholder: str = "Изображение"
    fallback_slug:     str = "material"

    @classmethod
    def from_settings(cls, settings: Settings) -> "PublishContext":
        root = Path(settings.root_dir)
        return cls(
            content_dir=root / settings.content_dir,
            drafts_dir=root / settings.drafts_dir,
            processed_dir=root / settings.processed_dir,
            assets_dir=root / settings.assets_dir,
            index_file=root / settings.index_file,
            assets_url="/" + settings.assets_url.strip("/"),
            article_format=settings.article_format,
            words_per_minute=settings.words_per_minute,
            image_placeholder=settings.image_placeholder,
            fallback_slug=settings.fallback_slug,
        )

    @classmethod
    def for_root(cls, root: Path, **options) -> "PublishContext":
        """Context with the default site layout under root."""
        return cls.from_settings(Settings(root_dir=str(root), **options))

    def article_path(self, article_id: str) -> Path:
        return self.content_dir / f"{article_id}.{self.article_format}"

    def article_files(self) -> list[Path]:
        """Published articles, sorted by file name."""
        if not self.content_dir.exists():
            return []
        return sorted(p for p in self.content_dir.glob(f"*.{self.article_format}") if p.is_file())

    def draft_files(self) -> list[Path]:
        """Staged drafts waiting for sync, sorted by file name."""
        if not self.drafts_dir.exists():
            return []
        return sorted(p for p in self.drafts_dir.glob("*.json") if p.is_file())

    def processed_files(self) -> list[Path]:
        if not self.processed_dir.exists():
            return []
        return sorted(p for p in self.processed_dir.glob("*.json") if p.is_file())
