"""
Pullet16 Interpreter - Line Scanner

Supplies program and data lines one at a time. Trailing whitespace is
stripped and blank lines are skipped, so a file that ends in extra
newlines does not produce phantom words or data items.
"""

from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Optional, Union


class LineSource:
    """Sequential reader over a list of text lines."""

    def __init__(self, lines: Iterable[str] = (), name: str = "<lines>"):
        self.name = name
        self._lines: List[str] = [ln.rstrip() for ln in lines if ln.strip()]
        self._pos = 0
        self.line_num = 0        # 1-based index of the last line returned

    @classmethod
    def from_text(cls, text: str, name: str = "<text>") -> LineSource:
        return cls(text.splitlines(), name)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> LineSource:
        p = Path(path)
        return cls.from_text(p.read_text(encoding="utf-8"), str(p))

    @classmethod
    def empty(cls) -> LineSource:
        return cls((), "<empty>")

    def has_next(self) -> bool:
        return self._pos < len(self._lines)

    def next_line(self) -> Optional[str]:
        """Return the next line, or None when the source is exhausted."""
        if not self.has_next():
            return None
        line = self._lines[self._pos]
        self._pos += 1
        self.line_num = self._pos
        return line

    @property
    def remaining(self) -> int:
        return len(self._lines) - self._pos

    def __iter__(self):
        while self.has_next():
            yield self.next_line()

    def __len__(self) -> int:
        return len(self._lines)
