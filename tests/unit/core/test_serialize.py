"""Unit tests for core/serialize.py: parse/serialize round trips"""

import pytest

from mdcontent.core.models import Block, BlockType, Document
from mdcontent.core.parse import parse_text
from mdcontent.core.serialize import serialize


def _round_trip(text: str) -> tuple[Document, Document]:
    doc = parse_text(text)
    return doc, parse_text(serialize(doc))


def test_round_trip_blog_post(blog_text):
    """Serializing and re-parsing yields identical metadata and blocks."""
    doc, again = _round_trip(blog_text)
    assert again.metadata == doc.metadata
    assert again.body == doc.body


def test_round_trip_keeps_languages(blog_text):
    doc, again = _round_trip(blog_text)
    assert again.code_languages == doc.code_languages == ["cmake", None]


def test_round_trip_resume(resume_text):
    doc, again = _round_trip(resume_text)
    assert again.metadata == {"title": "Résumé", "menu": "Résumé"}
    assert again.body == doc.body


def test_serialize_is_stable(blog_text):
    """Serializing a re-parsed document changes nothing."""
    once = serialize(parse_text(blog_text))
    assert serialize(parse_text(once)) == once


def test_serialize_layout(resume_text):
    """Front matter comes first, then a blank line, then blank-line separated blocks."""
    text = serialize(parse_text(resume_text))
    assert text == (
        "---\ntitle: Résumé\nmenu: Résumé\n---\n\n"
        "Download as [PDF](resume.pdf).\n\n"
        "## Experience\n\n"
        "- Software engineer\n- Build tooling\n"
    )


def test_serialize_without_metadata():
    """Documents without metadata are written without a header."""
    doc = Document(slug="x", hash="", markdown="", body=[Block(type=BlockType.paragraph, content="Hi.")])
    assert serialize(doc) == "Hi.\n"


def test_serialize_body_opening_with_rule():
    """An empty header is kept when the body itself starts with a delimiter line."""
    doc, again = _round_trip("---\n---\n\n---\n\nAfter rule.\n")
    assert [b.type for b in doc.body] == [BlockType.rule, BlockType.paragraph]
    assert again.body == doc.body
    assert again.metadata == {}


@pytest.mark.parametrize("text", [
    "---\ntitle: T\n---\n",
    "",
])
def test_serialize_empty_body(text):
    doc, again = _round_trip(text)
    assert again.metadata == doc.metadata
    assert again.body == []
