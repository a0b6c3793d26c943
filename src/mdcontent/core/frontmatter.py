"""Front matter splitting, YAML decoding with duplicate-key detection, and dumping"""

from typing import Any, Optional

import yaml
from yaml.constructor import ConstructorError

from mdcontent.errors import FrontmatterError


DELIMITER = "---"
BOM = "\ufeff"
MERGE_TAG = "tag:yaml.org,2002:merge"


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects mappings defining the same key twice."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == MERGE_TAG:
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    continue    # unhashable; reported by the base constructor
                if duplicate:
                    raise ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        f"found duplicate key {key!r}", key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def normalize_text(text: str) -> str:
    """Drop a leading BOM and convert CRLF/CR line endings to LF."""
    if text.startswith(BOM):
        text = text[len(BOM):]
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_frontmatter(text: str, path: Optional[str] = None) -> tuple[Optional[str], str, int]:
    """Return (yaml_text, body, body_line) for normalized text.

    yaml_text is None when the first line is not a delimiter. body_line is the
    0-based line index where the body starts.
    """
    lines = text.split("\n")
    if not lines or lines[0].rstrip() != DELIMITER:
        return None, text, 0

    for i in range(1, len(lines)):
        if lines[i].rstrip() == DELIMITER:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1:]), i + 1
    raise FrontmatterError(f"missing closing '{DELIMITER}' delimiter", path=path, line=1)


def load_frontmatter(yaml_text: Optional[str], path: Optional[str] = None) -> dict[str, Any]:
    """Decode a front matter block into a mapping; empty or absent blocks give {}."""
    if yaml_text is None or not yaml_text.strip():
        return {}
    try:
        data = yaml.load(yaml_text, Loader=UniqueKeyLoader)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        # +2: 1-based lines, and the opening delimiter
        line = mark.line + 2 if mark is not None else None
        problem = getattr(e, "problem", None) or str(e)
        raise FrontmatterError(f"invalid YAML front matter: {problem}", path=path, line=line) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"invalid YAML front matter: expected a mapping, got {type(data).__name__}", path=path, line=2,
        )
    bad = [k for k in data if not isinstance(k, str)]
    if bad:
        raise FrontmatterError(f"metadata keys must be strings, got {bad[0]!r}", path=path, line=2)
    return data


def dump_frontmatter(metadata: dict[str, Any]) -> str:
    """Return metadata as block-style YAML, keys in insertion order."""
    return yaml.safe_dump(metadata, default_flow_style=False, allow_unicode=True, sort_keys=False)
