"""File discovery, front matter extraction, and markdown-it tokenization"""

from pathlib import Path
from typing import Optional

from markdown_it import MarkdownIt

from mdcontent.core.blocks import tokens_to_blocks
from mdcontent.core.frontmatter import load_frontmatter, normalize_text, split_frontmatter
from mdcontent.core.models import Document, ParsedDoc
from mdcontent.core.utils.text import sha256, slugify, strip_order_prefix


MD_EXTENSIONS = {'.md', '.mdx'}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def document_slug(frontmatter: dict, path: Optional[Path], slug_source: str = 'file') -> str:
    """Slug from the 'slug' field, else from the file stem or parent folder name."""
    if frontmatter.get('slug'):
        return str(frontmatter['slug'])
    if path is None:
        return ''
    name = path.parent.name if slug_source == 'folder' and path.parent.name else path.stem
    return slugify(strip_order_prefix(name))


def tokenize(
    text: str,
    path: Optional[Path] = None,
    parser_config: str = 'gfm-like',
    ) -> ParsedDoc:
    """Split front matter from text and tokenize the body."""
    label = str(path) if path is not None else None
    raw = normalize_text(text)
    yaml_text, body, body_line = split_frontmatter(raw, path=label)
    frontmatter = load_frontmatter(yaml_text, path=label)
    return ParsedDoc(
        path=path,
        raw=raw,
        markdown=body,
        body_line=body_line,
        frontmatter=frontmatter,
        tokens=_make_parser(parser_config).parse(body),
    )


def parse_text(
    text: str,
    path: Optional[Path] = None,
    parser_config: str = 'gfm-like',
    slug_source: str = 'file',
    ) -> Document:
    """Parse document text into metadata and an ordered block body."""
    parsed = tokenize(text, path, parser_config)
    return Document(
        slug=document_slug(parsed.frontmatter, path, slug_source),
        path=str(path) if path is not None else None,
        hash=sha256(text),
        markdown=parsed.markdown,
        metadata=parsed.frontmatter,
        body=tokens_to_blocks(parsed.tokens, parsed.markdown.splitlines(keepends=True)),
    )


def parse_file(path: Path, parser_config: str = 'gfm-like', slug_source: str = 'file') -> Document:
    """Parse a single UTF-8 markdown file into a Document."""
    return parse_text(path.read_text(encoding='utf-8'), path, parser_config, slug_source)

