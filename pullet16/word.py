"""
Pullet16 Interpreter - Memory Word

One 16-bit Pullet16 word. Words are immutable: STC replaces the word at a
location with a new MemoryWord, it never edits fields in place.

Text form (one per program line) is the 16-character bit string,
most significant bit first:

    1000000000000101    ADD  direct  target 5
    1011000000000011    LD   indirect target 3
    1110000000000010    STP
"""

from __future__ import annotations
from dataclasses import dataclass

from .alu import bit_string, bit_string_to_int
from .config import (
    WORD_BITS, WORD_MASK, ADDRESS_BITS, ADDRESS_MASK, MNEMONIC_BITS,
)
from .faults import WordFormatError
from .opcodes import (
    Opcode, decode_opcode, ADDRESSED, OPCODE_TO_CODE, OPCODE_TO_SUBCODE,
    EXTENDED_CODE,
)

_MNEMONIC_SHIFT = WORD_BITS - MNEMONIC_BITS     # 13
_INDIRECT_SHIFT = ADDRESS_BITS                  # 12


@dataclass(frozen=True)
class MemoryWord:
    """16-bit word with mnemonic / indirect / address field views."""
    value: int = 0

    def __post_init__(self):
        if not 0 <= self.value <= WORD_MASK:
            raise ValueError(f"word value out of range: {self.value}")

    # --- constructors ---

    @classmethod
    def from_text(cls, text: str, line_num: int = 0) -> MemoryWord:
        """Decode one program line (16 chars of 0/1, trailing blanks ignored)."""
        bits = text.strip()
        if len(bits) != WORD_BITS:
            raise WordFormatError(
                f"expected {WORD_BITS} bits, got {len(bits)}", line_num, text)
        try:
            return cls(bit_string_to_int(bits))
        except ValueError:
            raise WordFormatError(f"not a bit string: {bits!r}", line_num, text)

    @classmethod
    def from_int(cls, value: int) -> MemoryWord:
        """Build a word from any int, keeping only the low 16 bits."""
        return cls(value & WORD_MASK)

    @classmethod
    def encode(cls, opcode: Opcode, address: int = 0,
               indirect: bool = False) -> MemoryWord:
        """Assemble a single instruction word."""
        if opcode in OPCODE_TO_SUBCODE:
            code = EXTENDED_CODE
            address = (address & ~0b111) | OPCODE_TO_SUBCODE[opcode]
        else:
            code = OPCODE_TO_CODE[opcode]
        return cls((code << _MNEMONIC_SHIFT)
                   | (int(bool(indirect)) << _INDIRECT_SHIFT)
                   | (address & ADDRESS_MASK))

    # --- field access ---

    @property
    def mnemonic(self) -> int:
        return self.value >> _MNEMONIC_SHIFT

    @property
    def indirect(self) -> int:
        """Indirection flag: 0 = direct, 1 = indirect."""
        return (self.value >> _INDIRECT_SHIFT) & 1

    @property
    def is_indirect(self) -> bool:
        return bool(self.indirect)

    @property
    def address(self) -> int:
        """12-bit address/operand payload as an unsigned int."""
        return self.value & ADDRESS_MASK

    @property
    def bits(self) -> str:
        return bit_string(self.value, WORD_BITS)

    @property
    def mnemonic_bits(self) -> str:
        return self.bits[:MNEMONIC_BITS]

    @property
    def indirect_bit(self) -> str:
        return self.bits[MNEMONIC_BITS]

    @property
    def address_bits(self) -> str:
        return self.bits[MNEMONIC_BITS + 1:]

    @property
    def opcode(self) -> Opcode:
        return decode_opcode(self.mnemonic, self.address)

    # --- display ---

    def disassemble(self) -> str:
        """Short mnemonic form, e.g. 'ADD * 12' for an indirect ADD of 12."""
        op = self.opcode
        if op not in ADDRESSED:
            return op.value
        star = '*' if self.is_indirect else ' '
        return f"{op.value:3s} {star} {self.address}"

    def __str__(self) -> str:
        return self.bits
