"""Document serialization back to front matter + markdown text"""

from mdcontent.core.frontmatter import DELIMITER, dump_frontmatter
from mdcontent.core.models import Block, Document


def build_body(blocks: list[Block]) -> str:
    """Join block sources with one blank line between them."""
    return "\n\n".join(b.content for b in blocks)


def serialize(doc: Document) -> str:
    """Return doc as text with a front matter block followed by the body.

    The front matter block is omitted when metadata is empty, unless the body
    itself opens with a delimiter line that would otherwise be read as one.
    """
    body = build_body(doc.body)
    body = f"{body}\n" if body else ""
    opens_with_delimiter = body.split("\n", 1)[0].rstrip() == DELIMITER
    if not doc.metadata and not opens_with_delimiter:
        return body
    fields = dump_frontmatter(doc.metadata) if doc.metadata else ""
    header = f"{DELIMITER}\n{fields}{DELIMITER}\n"
    return f"{header}\n{body}" if body else header
