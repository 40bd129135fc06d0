"""
Pullet16 Interpreter - Opcode Table / Decoder

Maps the 3-bit mnemonic field to an Opcode. Code 111 is shared by the
three I/O and control micro-operations; they are told apart by the low
3 bits of the address field.

    000 BAN   branch if accumulator negative
    001 SUB   subtract address field of target word
    010 STC   store accumulator, then clear it
    011 AND   bitwise AND with target word
    100 ADD   add target word (two's complement)
    101 LD    load address field of target word
    110 BR    branch unconditionally
    111 ...   xxxxxxxxx001 RD / xxxxxxxxx010 STP / xxxxxxxxx011 WRT

Anything that does not decode (an extended word with an unused sub-code)
comes back as Opcode.UNRECOGNIZED, which the interpreter executes as a
no-op. It is never an error.
"""

import enum
from typing import Dict

from .config import SUBCODE_BITS


class Opcode(enum.Enum):
    BAN = 'BAN'
    SUB = 'SUB'
    STC = 'STC'
    AND = 'AND'
    ADD = 'ADD'
    LD = 'LD'
    BR = 'BR'
    RD = 'RD'
    STP = 'STP'
    WRT = 'WRT'
    UNRECOGNIZED = '???'


# Marker for the shared extended mnemonic
EXTENDED = 'EXT'
EXTENDED_CODE = 0b111

# ──────────────────────────────────────────────
# Mnemonic field -> opcode
# ──────────────────────────────────────────────
# Format: 3-bit code -> Opcode (or EXTENDED for the shared 111 code)

MNEMONIC_CODES: Dict[int, object] = {
    0b000: Opcode.BAN,
    0b001: Opcode.SUB,
    0b010: Opcode.STC,
    0b011: Opcode.AND,
    0b100: Opcode.ADD,
    0b101: Opcode.LD,
    0b110: Opcode.BR,
    EXTENDED_CODE: EXTENDED,
}

# Low 3 address bits of an extended word -> opcode
EXTENDED_SUBCODES: Dict[int, Opcode] = {
    0b001: Opcode.RD,
    0b010: Opcode.STP,
    0b011: Opcode.WRT,
}

# Reverse lookup for encoding (assembler-style helpers and tests)
OPCODE_TO_CODE: Dict[Opcode, int] = {
    op: code for code, op in MNEMONIC_CODES.items() if op is not EXTENDED
}
OPCODE_TO_SUBCODE: Dict[Opcode, int] = {
    op: sub for sub, op in EXTENDED_SUBCODES.items()
}

# Opcodes whose address field names a memory operand
ADDRESSED = frozenset({
    Opcode.BAN, Opcode.SUB, Opcode.STC, Opcode.AND,
    Opcode.ADD, Opcode.LD, Opcode.BR,
})

_SUBCODE_MASK = (1 << SUBCODE_BITS) - 1


def decode_opcode(mnemonic: int, address: int) -> Opcode:
    """Decode a word's mnemonic field (and sub-code, if extended)."""
    op = MNEMONIC_CODES.get(mnemonic, Opcode.UNRECOGNIZED)
    if op is EXTENDED:
        return EXTENDED_SUBCODES.get(address & _SUBCODE_MASK, Opcode.UNRECOGNIZED)
    return op
