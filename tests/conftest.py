"""Root test configuration: an isolated site layout and draft file helpers"""

import base64
import json
from pathlib import Path

import pytest

from draftpub.core.context import PublishContext


PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture(name="png_bytes")
def png_bytes_fixture() -> bytes:
    """A 1x1 PNG image."""
    return PNG_BYTES


@pytest.fixture(name="png_data_url")
def png_data_url_fixture() -> str:
    """The same PNG as a browser-style data URL."""
    return PNG_DATA_URL


@pytest.fixture(name="ctx")
def ctx_fixture(tmp_path) -> PublishContext:
    """Default site layout rooted in a fresh tmp directory."""
    return PublishContext.for_root(tmp_path)


@pytest.fixture(name="write_draft")
def write_draft_fixture(ctx):
    """Write a staged draft JSON (dict or raw string) into the drafts directory."""
    def _write(name: str, data) -> Path:
        ctx.drafts_dir.mkdir(parents=True, exist_ok=True)
        path = ctx.drafts_dir / name
        path.write_text(data if isinstance(data, str) else json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="write_article")
def write_article_fixture(ctx):
    """Write a published article file into the content directory."""
    def _write(slug: str, text: str) -> Path:
        ctx.content_dir.mkdir(parents=True, exist_ok=True)
        path = ctx.article_path(slug)
        path.write_text(text, encoding="utf-8")
        return path
    return _write
