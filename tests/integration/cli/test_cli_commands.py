"""Integration tests for the draftpub CLI commands"""

import json

import pytest
from typer.testing import CliRunner

from draftpub.cli.cli import app
from draftpub.core.context import PublishContext


runner = CliRunner()


@pytest.fixture(autouse=True)
def chdir_tmp(tmp_path, monkeypatch):
    """Every command runs against a site rooted in tmp_path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DRAFTPUB_ROOT_DIR", raising=False)


def _invoke(*args):
    result = runner.invoke(app, list(args))
    assert result.exit_code == 0, result.output
    return result


def test_init_creates_layout(tmp_path):
    _invoke("init")
    ctx = PublishContext.for_root(tmp_path)
    assert ctx.drafts_dir.is_dir() and ctx.processed_dir.is_dir() and ctx.assets_dir.is_dir()


def test_new_then_sync_publishes(tmp_path, png_bytes):
    body = tmp_path / "body.txt"
    body.write_text("First paragraph.\n\nSecond paragraph.\n", encoding="utf-8")
    image = tmp_path / "Chart One.png"
    image.write_bytes(png_bytes)

    _invoke("new", "Hello CLI", "--date", "2024-06-01", "--tags", "News, Site Updates",
            "--body", str(body), "--image", str(image))
    ctx = PublishContext.for_root(tmp_path)
    assert len(ctx.draft_files()) == 1

    result = _invoke("sync")
    assert "1 published, 0 failed, 1 indexed" in result.output

    article = ctx.article_path("2024-06-01-hello-cli").read_text(encoding="utf-8")
    assert "- site-updates" in article
    assert "First paragraph.\n\nSecond paragraph." in article
    assert "![Изображение](/news-assets/2024-06-01-hello-cli/chart-one.png)" in article
    assert (ctx.assets_dir / "2024-06-01-hello-cli" / "chart-one.png").read_bytes() == png_bytes


def test_new_without_content_fails():
    result = runner.invoke(app, ["new", "Empty"])
    assert result.exit_code == 1
    assert "needs a title and some content" in result.output


def test_new_rejects_bad_date(tmp_path):
    body = tmp_path / "b.txt"
    body.write_text("x")
    result = runner.invoke(app, ["new", "T", "--date", "01/02/2024", "--body", str(body)])
    assert result.exit_code == 1
    assert "Invalid --date" in result.output


def test_sync_reports_failed_drafts(tmp_path):
    ctx = PublishContext.for_root(tmp_path)
    ctx.drafts_dir.mkdir(parents=True)
    (ctx.drafts_dir / "bad.json").write_text('{"meta": {"title": "No date"}}')
    result = runner.invoke(app, ["sync"])
    assert result.exit_code == 0
    assert "0 published, 1 failed" in result.output
    assert "missing meta.date" in result.output


def test_sync_fails_on_unwritable_index(tmp_path):
    ctx = PublishContext.for_root(tmp_path)
    ctx.index_file.mkdir(parents=True)
    result = runner.invoke(app, ["sync"])
    assert result.exit_code == 1
    assert "Sync failed" in result.output


def test_index_command(tmp_path):
    ctx = PublishContext.for_root(tmp_path)
    ctx.content_dir.mkdir(parents=True)
    ctx.article_path("2024-01-01-a").write_text("---\ntitle: A\ndate: '2024-01-01'\n---\n\nBody\n")
    result = _invoke("index")
    assert "Indexed 1 article(s)" in result.output
    assert json.loads(ctx.index_file.read_text())[0]["title"] == "A"


def test_edit_stages_reconstructed_draft(tmp_path):
    ctx = PublishContext.for_root(tmp_path)
    ctx.content_dir.mkdir(parents=True)
    ctx.article_path("2024-01-01-a").write_text(
        "---\ntitle: A\ndate: '2024-01-01'\n---\n\n## Head\n\nText\n", encoding="utf-8"
    )
    _invoke("index")
    result = _invoke("edit", "2024-01-01-a")
    assert "Staged 2 block(s)" in result.output
    staged = ctx.draft_files()
    assert len(staged) == 1
    data = json.loads(staged[0].read_text(encoding="utf-8"))
    assert data["meta"]["title"] == "A"
    assert [b["type"] for b in data["blocks"]] == ["heading2", "paragraph"]


def test_edit_unknown_slug():
    result = runner.invoke(app, ["edit", "missing-slug"])
    assert result.exit_code == 1
    assert "No article found for slug 'missing-slug'" in result.output


def test_preview_markdown_and_html(tmp_path):
    draft = tmp_path / "d.json"
    draft.write_text(json.dumps({
        "meta": {"title": "P"},
        "blocks": [{"type": "heading3", "content": "Sub"}, {"type": "paragraph", "content": "Text"}],
    }))
    assert _invoke("preview", str(draft)).output.strip() == "### Sub\n\nText"
    assert "<h3>Sub</h3>" in _invoke("preview", str(draft), "--html").output


def test_preview_malformed_draft(tmp_path):
    draft = tmp_path / "d.json"
    draft.write_text("{oops")
    result = runner.invoke(app, ["preview", str(draft)])
    assert result.exit_code == 1
    assert "malformed" in result.output


def test_slug_command():
    assert _invoke("slug", "  Hello, World_2024! ").output.strip() == "hello-world-2024"


def test_edit_with_corrupt_index(tmp_path):
    ctx = PublishContext.for_root(tmp_path)
    ctx.index_file.parent.mkdir(parents=True)
    ctx.index_file.write_text("not json")
    result = runner.invoke(app, ["edit", "2024-01-01-a"])
    assert result.exit_code == 1
    assert "No article found for slug '2024-01-01-a'" in result.output
