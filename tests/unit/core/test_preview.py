"""Unit tests for core/preview.py"""

from draftpub.core.editor import add_block, add_inline_asset, new_draft, set_cover, update_block
from draftpub.core.models import BlockType
from draftpub.core.preview import preview_html, preview_markdown


def _draft(png_data_url):
    draft = new_draft()
    draft.meta.title = "Preview"
    update_block(draft, draft.blocks[0].id, content="Intro text")
    update_block(draft, add_block(draft, BlockType.heading2).id, content="Section")
    asset = add_inline_asset(draft, "pic.png", png_data_url, alt="Pic")
    update_block(draft, add_block(draft, BlockType.image).id, asset_id=asset.id, content="Caption")
    return draft


def test_preview_markdown_uses_raw_payload(png_data_url):
    md = preview_markdown(_draft(png_data_url))
    assert md == f"Intro text\n\n## Section\n\n![Pic]({png_data_url})\n\n*Caption*"


def test_preview_skips_removed_assets(png_data_url):
    draft = _draft(png_data_url)
    draft.assets = []
    assert preview_markdown(draft) == "Intro text\n\n## Section"


def test_preview_resolves_cover_referenced_by_block(png_data_url):
    """The preview resolves any attached asset, including the cover."""
    draft = new_draft()
    cover = set_cover(draft, "c.png", "/news-assets/x/c.png")
    update_block(draft, draft.blocks[0].id, asset_id=cover.id)
    draft.blocks[0].type = BlockType.image
    assert preview_markdown(draft, placeholder="Image") == "![Image](/news-assets/x/c.png)"


def test_preview_html(png_data_url):
    html = preview_html(_draft(png_data_url))
    assert "<p>Intro text</p>" in html
    assert "<h2>Section</h2>" in html
    assert '<img src="data:image/png;base64,' in html
    assert 'alt="Pic"' in html
    assert "<em>Caption</em>" in html
