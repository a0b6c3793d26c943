"""Content model: documents, body blocks, and the intermediate parse result"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from mdcontent.core.taxonomy import Taxonomy, taxonomy_of


class BlockType(str, Enum):
    """Restrict body blocks to a predefined set of top-level elements"""
    content = "content"
    heading = "heading"
    paragraph = "paragraph"
    figure = "figure"
    code = "code"
    list = "list"
    table = "table"
    html = "html"
    quote = "quote"
    admonition = "admonition"
    rule = "rule"
    definition = "definition"


class Block(BaseModel):
    """A single top-level block of the body, kept as verbatim source."""
    type: BlockType
    content: str
    level: Optional[int] = None         # heading level (1-6); None for non-headings
    language: Optional[str] = None      # fenced code info word; highlighting hint only
    admonition: Optional[str] = None    # alert/notice kind for admonition blocks
    links: list[str] = Field(default_factory=list)


_MISSING = object()


class Document(BaseModel):
    """One page: decoded front matter followed by an ordered block body."""
    slug: str
    path: Optional[str] = None
    hash: str                       # sha256 of the source text as read
    markdown: str                   # body text without front matter
    metadata: dict[str, Any] = Field(default_factory=dict)
    body: list[Block] = Field(default_factory=list)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted metadata key ('highlight.theme'); default when any part is absent."""
        node: Any = self.metadata
        for part in key.split('.'):
            if not isinstance(node, dict):
                return default
            node = node.get(part, _MISSING)
            if node is _MISSING:
                return default
        return node

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    @property
    def title(self) -> Optional[str]:
        title = self.metadata.get('title')
        return None if title is None else str(title)

    @property
    def taxonomy(self) -> Taxonomy:
        return taxonomy_of(self.metadata)

    @property
    def code_languages(self) -> list[Optional[str]]:
        """Language tags of fenced code blocks, in body order."""
        return [b.language for b in self.body if b.type == BlockType.code]


@dataclass
class ParsedDoc:
    """Internal parse result carrying markdown-it tokens; not persisted."""
    path:        Optional[Path]
    raw:         str            # full source text (includes front matter)
    markdown:    str            # body only (front matter stripped)
    body_line:   int            # 0-based source line where the body starts
    frontmatter: dict[str, Any]
    tokens:      list           # markdown-it Token objects
