"""Top-level token to Block conversion using source line positions"""

import re

from mdcontent.core.models import Block, BlockType


BLOCK_TYPE_MAP: dict[str, BlockType] = {
    'heading_open':      BlockType.heading,
    'bullet_list_open':  BlockType.list,
    'ordered_list_open': BlockType.list,
    'fence':             BlockType.code,
    'code_block':        BlockType.code,
    'table_open':        BlockType.table,
    'html_block':        BlockType.html,
    'blockquote_open':   BlockType.quote,
    'hr':                BlockType.rule,
}

ALERT_RE = re.compile(r'^\s*>\s*\[!(\w+)\]')
NOTICE_RE = re.compile(r'^(!{1,4})\s')
NOTICE_KINDS = {1: 'yellow', 2: 'red', 3: 'blue', 4: 'green'}


def _heading_level(token) -> int | None:
    """Extract heading level (1-6) from a heading_open token tag, else None."""
    if token.type == 'heading_open' and token.tag[:1] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def _language(token) -> str | None:
    """First word of a fence info string ('python title="x"' -> 'python')."""
    if token.type != 'fence':
        return None
    words = token.info.split()
    return words[0] if words else None


def _block_end(tokens: list, i: int) -> int:
    """Index of the token closing the top-level block opened at i."""
    if tokens[i].nesting != 1:
        return i
    depth = 0
    for j in range(i, len(tokens)):
        depth += tokens[j].nesting
        if depth == 0:
            return j
    return len(tokens) - 1


def _links(tokens: list) -> list[str]:
    """Link hrefs and image srcs from inline children, in order."""
    links = []
    for tok in tokens:
        for child in tok.children or []:
            if child.type == 'link_open' and child.attrGet('href'):
                links.append(child.attrGet('href'))
            elif child.type == 'image' and child.attrGet('src'):
                links.append(child.attrGet('src'))
    return links


def _is_figure(tokens: list) -> bool:
    """True if the paragraph's inline content is a single image."""
    for tok in tokens:
        if tok.type == 'inline' and tok.children:
            non_ws = [c for c in tok.children if c.type not in ('softbreak', 'hardbreak')]
            return len(non_ws) == 1 and non_ws[0].type == 'image'
    return False


def _classify(tok, inner: list, content: str) -> tuple[BlockType, str | None]:
    """Return (block type, admonition kind) for a top-level token."""
    if tok.type == 'paragraph_open':
        if m := NOTICE_RE.match(content):
            return BlockType.admonition, NOTICE_KINDS[len(m.group(1))]
        if _is_figure(inner):
            return BlockType.figure, None
        return BlockType.paragraph, None
    if tok.type == 'blockquote_open':
        if m := ALERT_RE.match(content):
            return BlockType.admonition, m.group(1).lower()
        return BlockType.quote, None
    return BLOCK_TYPE_MAP.get(tok.type, BlockType.content), None


def _source_slice(lines: list[str], start: int, end: int) -> str:
    return ''.join(lines[start:end]).rstrip()


def _gap_block(lines: list[str], start: int, end: int) -> Block | None:
    """Source lines no token claims (link reference definitions) kept as one block."""
    chunk = lines[start:end]
    while chunk and not chunk[0].strip():
        chunk = chunk[1:]
    if not chunk:
        return None
    return Block(type=BlockType.definition, content=_source_slice(chunk, 0, len(chunk)))


def tokens_to_blocks(tokens: list, source_lines: list[str]) -> list[Block]:
    """Convert a body token stream to top-level Blocks in source order."""
    blocks: list[Block] = []
    covered = 0
    i = 0

    while i < len(tokens):
        tok = tokens[i]
        if tok.level != 0 or tok.nesting == -1 or tok.type == 'inline':
            i += 1
            continue

        end = _block_end(tokens, i)
        inner = tokens[i:end + 1]

        if tok.map:
            start, stop = tok.map
            if start > covered and (gap := _gap_block(source_lines, covered, start)):
                blocks.append(gap)
            content = _source_slice(source_lines, start, stop)
            covered = max(covered, stop)
        else:
            content = tok.content.rstrip()

        block_type, admonition = _classify(tok, inner, content)
        blocks.append(Block(
            type=block_type,
            content=content,
            level=_heading_level(tok),
            language=_language(tok),
            admonition=admonition,
            links=_links(inner),
        ))
        i = end + 1

    if covered < len(source_lines) and (gap := _gap_block(source_lines, covered, len(source_lines))):
        blocks.append(gap)
    return blocks
