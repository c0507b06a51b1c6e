"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:       str = "draftpub"
    root_dir:       str = Field(default=".",                  description="Site root; relative dirs resolve against it")
    content_dir:    str = Field(default="src/content/news",   description="Directory holding published articles")
    drafts_dir:     str = Field(default="src/content/news/drafts", description="Staging directory for draft JSON")
    processed_dir:  str = Field(default="src/content/news/drafts/_processed", description="Archive for consumed drafts")
    assets_dir:     str = Field(default="public/news-assets", description="Public asset store on disk")
    assets_url:     str = Field(default="/news-assets",       description="URL prefix of the public asset store")
    index_file:     str = Field(default="src/content/news/index.json", description="Listing index output")
    article_format: str = Field(default="mdx", pattern="^(md|mdx)$", description="md or mdx")
    words_per_minute:  int = Field(default=200, ge=1, description="Reading speed for readingTime")
    image_placeholder: str = Field(default="Изображение", description="Alt text when an image has none")
    fallback_slug:  str = Field(default="material", min_length=1, description="Used when a title slugifies to nothing")
    log_level:      str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then DRAFTPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"DRAFTPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
