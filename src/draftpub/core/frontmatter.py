"""YAML front-matter splitting, parsing and rendering for article files"""

import re
from datetime import date, datetime
from typing import Any

import yaml


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|\Z)', re.DOTALL)


class FrontmatterError(ValueError):
    """The YAML header exists but is not a valid mapping."""


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Return (raw_header, body); raw_header is None when the text has no header."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return None, text
    return m.group(1) or "", text[m.end():].lstrip("\n")


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed."""
    header, body = split_frontmatter(text)
    if header is None:
        return {}, text
    try:
        fm = yaml.safe_load(header) or {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid YAML frontmatter: {e}") from e
    if not isinstance(fm, dict):
        raise FrontmatterError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
    return fm, body


def render_frontmatter(fm: dict[str, Any], body: str) -> str:
    """Return body with a YAML front-matter block prepended, ending in a newline."""
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{body.strip()}\n"


def normalize_date(value: Any) -> str:
    """Format a front-matter date as YYYY-MM-DD; strings pass through, anything else is ''."""
    if isinstance(value, str):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()[:10]
    return ""
