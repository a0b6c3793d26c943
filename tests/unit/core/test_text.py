"""Unit tests for core/utils/text.py"""

import pytest

from mdcontent.core.utils.text import sha256, slugify, strip_order_prefix, unified_diff


@pytest.mark.parametrize("text,expected", [
    ("Hello World", "hello-world"),
    ("my_file_name", "my-file-name"),
    ("  leading and trailing  ", "leading-and-trailing"),
    ("multiple---hyphens", "multiple-hyphens"),
    ("Special! Ch@rs#", "special-chrs"),
    ("", ""),
])
def test_slugify_basic(text, expected):
    """slugify converts text to lowercase hyphenated slug."""
    assert slugify(text) == expected


@pytest.mark.parametrize("name,expected", [
    ("01.blog", "blog"),
    ("10.my-post", "my-post"),
    ("blog", "blog"),
    ("v1.2", "v1.2"),
])
def test_strip_order_prefix(name, expected):
    assert strip_order_prefix(name) == expected


def test_sha256_length():
    assert len(sha256("Résumé")) == 64
    assert sha256("a") != sha256("b")


def test_unified_diff():
    assert unified_diff("same\n", "same\n") == []
    lines = unified_diff("old\n", "new\n", "a/x.md", "b/x.md")
    assert lines[:2] == ["--- a/x.md\n", "+++ b/x.md\n"]
    assert "-old\n" in lines and "+new\n" in lines
