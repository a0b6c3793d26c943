"""Document checks: required fields, taxonomy shape, and local link targets"""

from collections import Counter
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

from pydantic import BaseModel

from mdcontent.config import Settings
from mdcontent.core.models import Document
from mdcontent.core.taxonomy import TAXONOMY_KEY, normalize_terms


class Severity(str, Enum):
    error = "error"
    warning = "warning"


class Issue(BaseModel):
    """A single problem found in a document."""
    severity: Severity
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity.value}: [{self.code}] {self.message}"


def _error(code: str, message: str) -> Issue:
    return Issue(severity=Severity.error, code=code, message=message)


def _warning(code: str, message: str) -> Issue:
    return Issue(severity=Severity.warning, code=code, message=message)


def check_required(doc: Document, required: list[str]) -> list[Issue]:
    return [
        _error("missing-field", f"required field '{key}' is missing")
        for key in required
        if doc.get(key) in (None, "")
    ]


def check_taxonomy(doc: Document, known_types: list[str]) -> list[Issue]:
    """Taxonomy must be a mapping of type -> scalar or list of scalars."""
    if not doc.has(TAXONOMY_KEY) or doc.metadata[TAXONOMY_KEY] is None:
        return []
    raw = doc.metadata[TAXONOMY_KEY]
    if not isinstance(raw, Mapping):
        return [_error("taxonomy-shape", f"'{TAXONOMY_KEY}' must be a mapping, got {type(raw).__name__}")]

    issues = []
    for kind, value in raw.items():
        terms = normalize_terms(value)
        if terms is None:
            issues.append(_error(
                "taxonomy-terms", f"'{TAXONOMY_KEY}.{kind}' must be a term or a list of terms",
            ))
            continue
        if known_types and kind not in known_types:
            issues.append(_warning("taxonomy-type", f"unknown taxonomy type '{kind}'"))
        dupes = [t for t, n in Counter(terms).items() if n > 1]
        if dupes:
            issues.append(_warning(
                "taxonomy-duplicate", f"'{TAXONOMY_KEY}.{kind}' repeats: {', '.join(dupes)}",
            ))
    return issues


def _local_target(link: str) -> Optional[str]:
    """Return the filesystem part of a relative link, or None for URLs, anchors, and absolute paths."""
    parts = urlsplit(link)
    if parts.scheme or parts.netloc or not parts.path or parts.path.startswith('/'):
        return None
    return unquote(parts.path)


def check_links(doc: Document) -> list[Issue]:
    """Warn about relative links whose target does not exist beside the document."""
    if doc.path is None:
        return []
    base = Path(doc.path).parent
    issues = []
    for block in doc.body:
        for link in block.links:
            target = _local_target(link)
            if target is not None and not (base / target).exists():
                issues.append(_warning("broken-link", f"link target '{link}' does not exist"))
    return issues


def check_document(doc: Document, settings: Settings) -> list[Issue]:
    """Run every document check enabled by settings."""
    issues = check_required(doc, settings.required_fields)
    issues += check_taxonomy(doc, settings.taxonomy_types)
    if settings.check_links:
        issues += check_links(doc)
    return issues


def has_errors(issues: list[Issue]) -> bool:
    return any(i.severity == Severity.error for i in issues)
