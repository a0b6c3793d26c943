"""Export pipeline: build normalized markdown, sidecar JSON, and write output files"""

import base64
import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from mdcontent.core.models import Document
from mdcontent.core.serialize import serialize


def jsonable(value: Any) -> Any:
    """Recursively convert YAML values json can not encode.

    Dates become ISO strings, sets (!!set) sorted lists, bytes (!!binary) base64.
    """
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, (set, frozenset)):
        return sorted((jsonable(v) for v in value), key=str)
    if isinstance(value, dict):
        return {str(k): jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(v) for v in value]
    return value


def build_sidecar(doc: Document) -> dict:
    """Build the sidecar JSON dict: slug, path, hash, metadata, taxonomy, blocks."""
    return {
        "slug": doc.slug,
        "path": doc.path,
        "hash": doc.hash,
        "title": doc.title,
        "metadata": jsonable(doc.metadata),
        "taxonomy": doc.taxonomy.terms,
        "blocks": [b.model_dump(mode="json", exclude_none=True) for b in doc.body],
    }


def _relative_parent(doc: Document, source_root: Optional[Path]) -> Path:
    """Source parent directory relative to source_root (or as stored when not under it)."""
    parent = Path(doc.path).parent if doc.path else Path()
    if source_root is not None:
        try:
            return parent.resolve().relative_to(source_root.resolve())
        except ValueError:
            pass
    if parent.is_absolute():
        parent = parent.relative_to(parent.anchor)
    return Path(*[p for p in parent.parts if p != '..'])


def output_paths(doc: Document, output_dir: Path, source_root: Optional[Path] = None) -> tuple[Path, Path]:
    """Output (md_path, json_path) mirroring the source directory structure:
      output_dir / <parent relative to source_root> / doc.slug.{md|json}
    """
    dest_dir = output_dir / _relative_parent(doc, source_root)
    name = doc.slug or "index"
    return dest_dir / f"{name}.md", dest_dir / f"{name}.json"


def write_doc(doc: Document, output_dir: Path, source_root: Optional[Path] = None) -> tuple[Path, Path]:
    """Write normalized MD + sidecar JSON for a single document. Returns (md_path, json_path)."""
    md_path, json_path = output_paths(doc, output_dir, source_root)
    md_path.parent.mkdir(parents=True, exist_ok=True)
    # both payloads are built before either file is written
    markdown = serialize(doc)
    sidecar = json.dumps(build_sidecar(doc), indent=2, ensure_ascii=False)
    md_path.write_text(markdown, encoding='utf-8')
    json_path.write_text(sidecar, encoding='utf-8')
    return md_path, json_path
