"""Database table definitions for indexed documents and their taxonomy terms"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from uuid import UUID, uuid4

from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, JSON, Text, String, UniqueConstraint


class DocumentRow(SQLModel, table=True):
    """A content document as last seen on disk"""
    __tablename__ = "documents"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(..., index=True, nullable=False)
    path: str = Field(..., sa_column=Column(Text, nullable=False, unique=True))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    title: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    date: Optional[str] = Field(default=None, description="Front matter date as written (ISO for YAML dates)")
    frontmatter: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    indexed_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    terms: List["TaxonomyTerm"] = Relationship(
        back_populates="document", sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class TaxonomyTerm(SQLModel, table=True):
    """One taxonomy term of a document, in the order the author wrote it"""
    __tablename__ = "taxonomy_terms"
    __table_args__ = (UniqueConstraint("document_id", "kind", "position", name="uq_term_doc_kind_pos"),)
    id: Optional[int] = Field(default=None, primary_key=True)
    document_id: UUID = Field(..., foreign_key="documents.id", index=True, nullable=False)
    kind: str = Field(..., sa_column=Column(String(64), nullable=False, index=True))
    term: str = Field(..., index=True, nullable=False)
    position: int = Field(..., nullable=False, description="Position of the term within its taxonomy list")
    document: Optional[DocumentRow] = Relationship(back_populates="terms")
