"""Exception types raised while reading content documents"""

from typing import Optional


class ContentError(Exception):
    """Base class for content model failures."""


class FrontmatterError(ContentError, ValueError):
    """The metadata block is missing its delimiter or does not decode to a mapping."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        self.path = path
        self.line = line
        where = path or "<text>"
        if line is not None:
            where = f"{where}:{line}"
        super().__init__(f"{where}: {message}")
        self.reason = message
