"""Slug generation for article identifiers and file names"""

import re


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug limited to [a-z0-9-]."""
    text = text.lower().strip()
    text = re.sub(r'[\s_]+', '-', text)
    text = re.sub(r'[^a-z0-9-]', '', text)
    return re.sub(r'-+', '-', text).strip('-')
