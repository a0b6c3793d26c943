"""Text helpers: content hashing, slugs, and unified diffs"""

import difflib
import hashlib
import re


ORDER_PREFIX_RE = re.compile(r'^\d+\.')


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 of content (64 chars, matches String(64) column)."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def strip_order_prefix(name: str) -> str:
    """Drop a folder ordering prefix such as '01.' ('01.blog' -> 'blog')."""
    return ORDER_PREFIX_RE.sub('', name, count=1)


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def unified_diff(old: str, new: str, from_label: str = "a", to_label: str = "b") -> list[str]:
    """Return unified diff lines (newlines included) from old to new; empty if identical."""
    return list(difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=from_label,
        tofile=to_label,
    ))
