"""Pipeline step functions: check, format, export, and index orchestration"""

import logging
from datetime import datetime
from pathlib import Path

from sqlmodel import Session

from mdcontent.config import Settings
from mdcontent.core.export import output_paths, write_doc
from mdcontent.core.parse import discover_files, parse_file
from mdcontent.core.serialize import serialize
from mdcontent.core.utils.text import unified_diff
from mdcontent.core.validate import Issue, Severity, check_document
from mdcontent.crud.documents import prune_missing, upsert_document
from mdcontent.errors import ContentError


log = logging.getLogger(__name__)


def _files(path: str) -> tuple[Path, list[Path]]:
    """Return (source_root, markdown files) for a file or directory argument."""
    root = Path(path)
    if not root.exists():
        raise RuntimeError(f"Path not found: {path}")
    files = discover_files(root)
    log.debug("discovered %d file(s) under %s", len(files), root)
    return (root.parent if root.is_file() else root), files


def _parse(p: Path, settings: Settings):
    return parse_file(p, settings.parser_config, settings.slug_source)


def run_check(path: str, settings: Settings) -> list[tuple[Path, list[Issue]]]:
    """Parse and validate every document. Returns (source_path, issues) pairs.

    Parse failures are reported as a single 'parse-error' issue for that file.
    """
    _, files = _files(path)
    results = []
    for p in files:
        try:
            doc = _parse(p, settings)
        except (ContentError, UnicodeDecodeError) as e:
            log.debug("parse failed for %s: %s", p, e)
            results.append((p, [Issue(severity=Severity.error, code="parse-error", message=str(e))]))
            continue
        results.append((p, check_document(doc, settings)))
    return results


def run_format(path: str, settings: Settings, write: bool = False) -> list[tuple[Path, list[str]]]:
    """Normalize documents. Returns (source_path, diff_lines) for files that differ.

    With write=True the normalized text replaces the file content.
    """
    _, files = _files(path)
    results = []
    for p in files:
        try:
            original = p.read_text(encoding='utf-8')
            normalized = serialize(_parse(p, settings))
        except Exception as e:
            raise RuntimeError(f"Failed to format {p}: {e}") from e
        diff = unified_diff(original, normalized, f"a/{p}", f"b/{p}")
        if not diff:
            continue
        if write:
            p.write_text(normalized, encoding='utf-8')
            log.debug("rewrote %s", p)
        results.append((p, diff))
    return results


def run_export(path: str, settings: Settings, output_dir: Path) -> list[tuple[Path, Path]]:
    """Write normalized MD + sidecar JSON per document. Returns (source_path, md_path) pairs.

    Two documents resolving to the same output file is an error.
    """
    root, files = _files(path)
    results = []
    written = {}
    for p in files:
        try:
            doc = _parse(p, settings)
            md_path, _ = output_paths(doc, output_dir, root)
            if md_path in written:
                raise RuntimeError(f"output {md_path} already written by {written[md_path]}")
            write_doc(doc, output_dir, root)
        except Exception as e:
            raise RuntimeError(f"Failed to export {p}: {e}") from e
        written[md_path] = p
        results.append((p, md_path))
    return results


def run_index(
    engine,
    path: str,
    settings: Settings,
    prune: bool = False,
    ) -> tuple[dict[str, int], list[tuple[str, str]]]:
    """Parse documents under path and upsert them into the index.

    Returns (counts, changes) where changes is a list of (status, path) for
    created/updated/removed docs.
    """
    _, files = _files(path)
    indexed_at = datetime.now()
    counts = {"created": 0, "updated": 0, "unchanged": 0, "removed": 0}
    changes = []
    with Session(engine) as session:
        for p in files:
            try:
                doc = _parse(p, settings)
                _, status = upsert_document(session, doc, indexed_at)
            except Exception as e:
                raise RuntimeError(f"Failed to index {p}: {e}") from e
            counts[status] += 1
            if status != 'unchanged':
                changes.append((status, doc.path))
        if prune and Path(path).is_dir():
            for removed in prune_missing(session, [str(p) for p in files], under=path):
                counts["removed"] += 1
                changes.append(("removed", removed))
        session.commit()
    return counts, changes
