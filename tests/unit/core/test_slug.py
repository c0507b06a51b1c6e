"""Unit tests for core/utils/slug.py"""

import re

import pytest

from draftpub.core.utils.slug import slugify


SLUG_RE = re.compile(r'^[a-z0-9]+(-[a-z0-9]+)*$')


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
    ("Tabs\tand\nnewlines", "tabs-and-newlines"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify converts text to lowercase hyphenated slug."""
    assert slugify(text) == expected


@pytest.mark.parametrize("text", ["!!!", "---", "   ", "Привет мир", "¿?"])
def test_slugify_empty_for_punctuation_or_non_latin(text):
    """Input without [a-z0-9] characters collapses to an empty slug."""
    assert slugify(text) == ""


def test_slugify_drops_non_ascii_letters_but_keeps_ascii():
    """Non-ASCII letters are removed, surrounding words are kept."""
    assert slugify("Café Über 2024") == "caf-ber-2024"


def test_slugify_strips_leading_trailing_hyphens():
    """slugify strips leading/trailing hyphens from result."""
    assert slugify("!leading - trailing!") == "leading-trailing"


@pytest.mark.parametrize("text", [
    "Hello World", "  A -- B __ C  ", "Draft #12: Launch!", "x_-_y", "ÀÉÎ õü", "-a-", "",
])
def test_slugify_shape_and_idempotence(text):
    """Output is empty or matches the slug pattern, and slugify is idempotent."""
    slug = slugify(text)
    assert slug == "" or SLUG_RE.match(slug)
    assert slugify(slug) == slug
