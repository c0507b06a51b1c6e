"""Editor preview: render a draft's body with its raw asset payloads"""

from markdown_it import MarkdownIt

from draftpub.core.convert import DEFAULT_PLACEHOLDER, render_body
from draftpub.core.models import Draft, ResolvedAsset


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def preview_markdown(draft: Draft, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Body markdown as sync would write it, but pointing images at their data URLs."""
    by_id = {
        a.id: ResolvedAsset(path=a.data_url, alt=a.alt or "", filename=a.filename)
        for a in draft.assets
    }
    return render_body(draft.blocks, by_id.get, placeholder)


def preview_html(draft: Draft, placeholder: str = DEFAULT_PLACEHOLDER, preset: str = "commonmark") -> str:
    return _make_parser(preset).render(preview_markdown(draft, placeholder))
