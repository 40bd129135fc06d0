"""
Pullet16 Interpreter - Machine Constants and Run Configuration

Word layout (16 bits, most significant bit first):

    bit  15 14 13 | 12 | 11 .............. 0
         mnemonic | I  | address / operand

  mnemonic  3-bit opcode field
  I         indirection flag (0 = direct, 1 = indirect)
  address   12-bit unsigned payload (0..4095)

The extended mnemonic (111) carries a sub-code in the low 3 bits of the
address field: 001 = RD, 010 = STP, 011 = WRT.
"""

from dataclasses import dataclass
from typing import Optional


# ──────────────────────────────────────────────
# Word geometry
# ──────────────────────────────────────────────

WORD_BITS = 16
WORD_MASK = 0xFFFF
WORD_MODULUS = 1 << WORD_BITS           # 65536
SIGN_THRESHOLD = 32768                  # values above this read as negative

MNEMONIC_BITS = 3
INDIRECT_BITS = 1
ADDRESS_BITS = 12
ADDRESS_MASK = 0x0FFF
SUBCODE_BITS = 3

# ──────────────────────────────────────────────
# Memory
# ──────────────────────────────────────────────

MAX_MEMORY = 4095                       # highest legal address (12-bit space)

# Signed hex literal: sign + 4 uppercase hex digits
HEX_LITERAL_LENGTH = 5

LOGGER_NAME = "pullet16"


@dataclass(frozen=True)
class MachineConfig:
    """Knobs for one interpreter run.

    max_memory: highest legal address for any memory access.
    allow_location_zero: whether address 0 passes the bound check. Forward
        references resolve to location 0, so strict mode turns every
        forward reference into a fatal fault.
    max_steps: stop with STEP_LIMIT after this many instructions
        (None = run until halt or fault).
    trace: keep an in-memory per-instruction trace (see get_trace()).
    """
    max_memory: int = MAX_MEMORY
    allow_location_zero: bool = True
    max_steps: Optional[int] = None
    trace: bool = False

    @property
    def min_location(self) -> int:
        return 0 if self.allow_location_zero else 1


DEFAULT_CONFIG = MachineConfig()
