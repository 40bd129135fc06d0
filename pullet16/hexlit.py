"""
Pullet16 Interpreter - Signed Hex Literal

Data lines consumed by RD are signed hex literals: exactly five characters,
a '+' or '-' sign followed by four uppercase hex digits.

    +0005  ->     5
    -0005  ->    -5
    +FFFF  -> 65535   (RD then reads it through twos_complement -> -1)

A malformed literal never raises. The problems are recorded on the object
(has_error / error_messages) and value holds a best-effort reading: the
sign is applied when it is recognized, and digits that do not parse give 0.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import List

from .config import HEX_LITERAL_LENGTH

_HEX_DIGITS = re.compile(r'^[0-9A-F]{4}$')


@dataclass
class HexLiteral:
    """One parsed signed hex token."""
    text: str
    value: int = field(default=0, init=False)
    is_negative: bool = field(default=False, init=False)
    is_invalid: bool = field(default=False, init=False)
    errors: List[str] = field(default_factory=list, init=False)

    def __post_init__(self):
        self._parse()

    @property
    def has_error(self) -> bool:
        return self.is_invalid

    @property
    def error_messages(self) -> str:
        return '; '.join(self.errors)

    def _flag(self, message: str):
        self.is_invalid = True
        self.errors.append(message)

    def _parse(self):
        text = self.text
        if len(text) != HEX_LITERAL_LENGTH:
            self._flag(f"literal {text!r} is not {HEX_LITERAL_LENGTH} characters")

        sign, digits = text[:1], text[1:]
        if sign == '+':
            self.is_negative = False
        elif sign == '-':
            self.is_negative = True
        else:
            self._flag(f"bad sign character {sign!r}")

        if not _HEX_DIGITS.match(digits):
            self._flag(f"bad hex digits {digits!r}")
            self.value = 0
            return

        self.value = int(digits, 16)
        if self.is_negative:
            self.value = -self.value

    def __str__(self) -> str:
        return self.text


def parse_hex_literal(text: str) -> HexLiteral:
    """Parse a data line. Surrounding whitespace is ignored."""
    return HexLiteral(text.strip())
