"""Document index persistence: upsert, pruning, slug and taxonomy lookup"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from sqlalchemy import func
from sqlmodel import Session, select

from mdcontent.core.export import jsonable
from mdcontent.core.models import Document
from mdcontent.crud.models import DocumentRow, TaxonomyTerm


log = logging.getLogger(__name__)


def get_by_path(session: Session, path: str) -> DocumentRow | None:
    """Return the DocumentRow with the given source path, or None if not found."""
    return session.exec(select(DocumentRow).where(DocumentRow.path == path)).one_or_none()


def get_by_slug(session: Session, slug: str) -> DocumentRow | None:
    """Return the first DocumentRow with the given slug, or None if not found."""
    return session.exec(select(DocumentRow).where(DocumentRow.slug == slug)).first()


def get_all_documents(session: Session) -> list[DocumentRow]:
    return list(session.exec(select(DocumentRow).order_by(DocumentRow.path)).all())


def _replace_terms(session: Session, row: DocumentRow, doc: Document) -> None:
    """Delete the row's terms and insert the document's current taxonomy in order."""
    row.terms.clear()
    # deletes must reach the database before inserts reuse (kind, position)
    session.flush()
    for kind, terms in doc.taxonomy.terms.items():
        for position, term in enumerate(terms):
            row.terms.append(TaxonomyTerm(document_id=row.id, kind=kind, term=term, position=position))


def _apply(row: DocumentRow, doc: Document, indexed_at: datetime) -> None:
    date = doc.metadata.get('date')
    row.slug = doc.slug
    row.hash = doc.hash
    row.title = doc.title
    row.date = None if date is None else str(jsonable(date))
    row.frontmatter = jsonable(doc.metadata)
    row.indexed_at = indexed_at


def upsert_document(session: Session, doc: Document, indexed_at: datetime) -> tuple[DocumentRow, str]:
    """Insert or update the row for doc.path. Returns (row, status).

    status is 'created', 'updated', or 'unchanged' (same content hash).
    """
    row = get_by_path(session, doc.path)
    if row is not None and row.hash == doc.hash:
        return row, 'unchanged'

    status = 'created' if row is None else 'updated'
    if row is None:
        row = DocumentRow(slug=doc.slug, path=doc.path, hash=doc.hash)
    _apply(row, doc, indexed_at)
    session.add(row)
    session.flush()
    _replace_terms(session, row, doc)
    session.flush()
    log.debug("%s %s (%s)", status, doc.path, doc.slug)
    return row, status


def prune_missing(session: Session, paths: Iterable[str], under: str | None = None) -> list[str]:
    """Delete rows whose path is not in paths; limited to rows under the directory under when given.

    Returns the deleted paths.
    """
    keep = set(paths)
    removed = []
    for row in get_all_documents(session):
        if row.path in keep or (under is not None and not Path(row.path).is_relative_to(under)):
            continue
        removed.append(row.path)
        session.delete(row)
    session.flush()
    for path in removed:
        log.debug("pruned %s", path)
    return removed


def find_by_term(session: Session, kind: str, term: str) -> list[DocumentRow]:
    """Return documents carrying term under the given taxonomy kind, ordered by path."""
    stmt = (
        select(DocumentRow)
        .join(TaxonomyTerm, TaxonomyTerm.document_id == DocumentRow.id)
        .where(TaxonomyTerm.kind == kind, TaxonomyTerm.term == term)
        .distinct()
        .order_by(DocumentRow.path)
    )
    return list(session.exec(stmt).all())


def term_counts(session: Session, kind: str) -> list[tuple[str, int]]:
    """Return (term, document count) pairs for a taxonomy kind, most used first."""
    count = func.count(func.distinct(TaxonomyTerm.document_id))
    stmt = (
        select(TaxonomyTerm.term, count)
        .where(TaxonomyTerm.kind == kind)
        .group_by(TaxonomyTerm.term)
        .order_by(count.desc(), TaxonomyTerm.term)
    )
    return [(term, n) for term, n in session.exec(stmt).all()]
