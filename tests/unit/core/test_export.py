"""Unit tests for core/export.py"""

import datetime
import json

from mdcontent.core.export import build_sidecar, jsonable, write_doc
from mdcontent.core.parse import parse_file, parse_text


def test_jsonable_converts_dates():
    value = {"date": datetime.date(2019, 3, 2), "nested": [datetime.datetime(2019, 3, 2, 10, 30)]}
    assert jsonable(value) == {"date": "2019-03-02", "nested": ["2019-03-02T10:30:00"]}


def test_build_sidecar(blog_file):
    """Sidecar carries slug, metadata with ISO dates, taxonomy, and blocks."""
    doc = parse_file(blog_file)
    sidecar = build_sidecar(doc)
    assert sidecar["slug"] == "cpp-interviews"
    assert sidecar["title"] == "Practicing for C++ interviews"
    assert sidecar["metadata"]["date"] == "2019-03-02"
    assert sidecar["taxonomy"]["tag"][2] == "c++"
    code = [b for b in sidecar["blocks"] if b["type"] == "code"]
    assert [b.get("language") for b in code] == ["cmake", None]
    json.dumps(sidecar)


def test_write_doc_mirrors_source_dir(tmp_path):
    """Output directory mirrors the source path relative to source_root."""
    src = tmp_path / "content" / "blog"
    src.mkdir(parents=True)
    f = src / "post.md"
    f.write_text("---\ntitle: Post\n---\n\n# Hi\n", encoding="utf-8")

    out = tmp_path / "dist"
    md_path, json_path = write_doc(parse_file(f), out, source_root=tmp_path / "content")
    assert md_path == out / "blog" / "post.md"
    assert json_path == out / "blog" / "post.json"
    assert md_path.read_text(encoding="utf-8") == "---\ntitle: Post\n---\n\n# Hi\n"
    assert json.loads(json_path.read_text(encoding="utf-8"))["slug"] == "post"


def test_write_doc_without_path(tmp_path):
    """Documents parsed from text are written at the output root."""
    doc = parse_text("---\nslug: loose\n---\nBody\n")
    md_path, _ = write_doc(doc, tmp_path)
    assert md_path == tmp_path / "loose.md"


def test_jsonable_converts_sets_and_bytes():
    """YAML !!set values become sorted lists and !!binary values base64 text."""
    value = {"s": {"b", "a"}, "raw": b"hi", "nested": [frozenset({2, 1})]}
    assert jsonable(value) == {"s": ["a", "b"], "raw": "aGk=", "nested": [[1, 2]]}


def test_write_doc_with_yaml_set(tmp_path):
    """Front matter holding a !!set exports both the markdown and the sidecar."""
    doc = parse_text("---\nslug: p\ns: !!set {b, a}\n---\nBody\n")
    md_path, json_path = write_doc(doc, tmp_path)
    assert md_path.exists()
    assert json.loads(json_path.read_text(encoding="utf-8"))["metadata"]["s"] == ["a", "b"]
