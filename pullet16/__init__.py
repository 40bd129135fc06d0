"""
Pullet16 Interpreter
====================
Simulator for the Pullet16, a 16-bit single-accumulator teaching computer
with a 12-bit word-addressed memory and ten instructions
(ADD AND BAN BR LD RD STC STP SUB WRT).

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌─────────────┐
    │ program  │───>│ scanner  │───>│  loader  │───>│   memory    │
    │ (.txt)   │    │ (lines)  │    │ (words)  │    │ (0..4095)   │
    └──────────┘    └──────────┘    └──────────┘    └──────┬──────┘
                                                          │
    ┌──────────┐    ┌──────────┐    ┌──────────────────────▼──────┐
    │  data    │───>│  hexlit  │───>│ interpreter (fetch/decode/  │──> WRT output
    │ (.txt)   │    │ (RD)     │    │ execute, regs, opcodes, alu)│
    └──────────┘    └──────────┘    └─────────────────────────────┘
"""

__version__ = "1.0.0"

from .config import MachineConfig, DEFAULT_CONFIG, MAX_MEMORY
from .faults import (
    MachineFault, AddressOutOfBoundsError, ProgramCounterError,
    DataExhaustedError, WordFormatError, MemoryCapacityError,
)
from .hexlit import HexLiteral, parse_hex_literal
from .interpreter import Interpreter, StopReason, format_write_record
from .opcodes import Opcode
from .scanner import LineSource
from .word import MemoryWord


def run_program(program: str, data: str = "", *,
                config: MachineConfig = DEFAULT_CONFIG):
    """Load program text, run it against data text, return (interpreter, reason).

    Faults propagate as MachineFault subclasses.
    """
    interp = Interpreter(config, data=LineSource.from_text(data, "<data>"))
    interp.load_program(LineSource.from_text(program, "<program>"))
    reason = interp.run()
    return interp, reason
