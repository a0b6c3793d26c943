"""Unit tests for core/taxonomy.py"""

import pytest

from mdcontent.core.parse import parse_text
from mdcontent.core.taxonomy import build_index, normalize_terms, taxonomy_of


@pytest.mark.parametrize("value,expected", [
    (None,              []),
    ("blog",            ["blog"]),
    (["a", "b", "a"],   ["a", "b", "a"]),
    ([2019, 1.5, True], ["2019", "1.5", "true"]),
    ([{"x": 1}],        None),
    ({"x": 1},          None),
])
def test_normalize_terms(value, expected):
    assert normalize_terms(value) == expected


def test_taxonomy_absent():
    """No taxonomy block gives an empty, falsy Taxonomy."""
    tax = taxonomy_of({"title": "Résumé", "menu": "Résumé"})
    assert not tax
    assert tax.terms == {}
    assert tax.tags == []


def test_taxonomy_skips_malformed_types():
    tax = taxonomy_of({"taxonomy": {"tag": ["a"], "series": {"nested": "x"}}})
    assert tax.terms == {"tag": ["a"]}


def test_taxonomy_not_a_mapping():
    assert taxonomy_of({"taxonomy": ["a", "b"]}).terms == {}


def test_build_index():
    """build_index groups slugs by term, once per document."""
    docs = [
        parse_text("---\nslug: one\ntaxonomy:\n  tag: [cmake, conan, cmake]\n---\n"),
        parse_text("---\nslug: two\ntaxonomy:\n  tag: [cmake]\n  category: blog\n---\n"),
        parse_text("---\nslug: three\n---\n"),
    ]
    assert build_index(docs) == {"cmake": ["one", "two"], "conan": ["one"]}
    assert build_index(docs, "category") == {"blog": ["two"]}
