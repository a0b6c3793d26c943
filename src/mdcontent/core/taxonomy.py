"""Taxonomy terms (category, tag, ...) decoded from document front matter"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pydantic import BaseModel, Field


TAXONOMY_KEY = "taxonomy"
SCALAR_TYPES = (str, int, float, bool)


class Taxonomy(BaseModel):
    """Ordered term lists per taxonomy type. Duplicates are kept as written."""
    terms: dict[str, list[str]] = Field(default_factory=dict)

    def get(self, kind: str) -> list[str]:
        return list(self.terms.get(kind, []))

    @property
    def categories(self) -> list[str]:
        return self.get("category")

    @property
    def tags(self) -> list[str]:
        return self.get("tag")

    def __bool__(self) -> bool:
        return any(self.terms.values())


def _term(value: Any) -> str:
    # YAML turns `true` into a bool; keep the author's spelling
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_terms(value: Any) -> Optional[list[str]]:
    """Return value as a list of string terms, or None if it is not a scalar or list of scalars."""
    if value is None:
        return []
    if isinstance(value, SCALAR_TYPES):
        return [_term(value)]
    if isinstance(value, list) and all(isinstance(v, SCALAR_TYPES) for v in value):
        return [_term(v) for v in value]
    return None


def taxonomy_of(metadata: Mapping[str, Any]) -> Taxonomy:
    """Build a Taxonomy from metadata; malformed entries are skipped (see validate)."""
    raw = metadata.get(TAXONOMY_KEY)
    if not isinstance(raw, Mapping):
        return Taxonomy()
    terms = {}
    for kind, value in raw.items():
        normalized = normalize_terms(value)
        if normalized is not None:
            terms[str(kind)] = normalized
    return Taxonomy(terms=terms)


def build_index(docs: Iterable, kind: str = "tag") -> dict[str, list[str]]:
    """Group document slugs by taxonomy term, terms sorted, slugs in input order and unique."""
    index: dict[str, list[str]] = {}
    for doc in docs:
        for term in dict.fromkeys(doc.taxonomy.get(kind)):
            index.setdefault(term, []).append(doc.slug)
    return dict(sorted(index.items()))
