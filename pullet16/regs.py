"""
Pullet16 Interpreter - Register Set

Register model:
  PC     program counter, index of the next word to fetch (0-based)
  ACCUM  accumulator; a host int, logically 16 bits. Read through
         alu.twos_complement() whenever it is used as a signed value.
  state  RUNNING or HALTED. Halting is a state, not a magic PC value,
         so no legal address can collide with it.
"""

import enum

from .alu import twos_complement, bit_string


class RunState(enum.Enum):
    RUNNING = 'RUNNING'
    HALTED = 'HALTED'


class Registers:
    """Pullet16 CPU register set."""

    __slots__ = ('pc', 'accum', 'state', 'steps')

    def __init__(self):
        self.pc: int = 0
        self.accum: int = 0
        self.state: RunState = RunState.RUNNING
        self.steps: int = 0      # instructions executed so far

    @property
    def halted(self) -> bool:
        return self.state is RunState.HALTED

    @property
    def signed_accum(self) -> int:
        return twos_complement(self.accum)

    def halt(self):
        self.state = RunState.HALTED

    def display(self) -> str:
        """One-line register summary for trace output."""
        return (f"PC={self.pc:4d} ACC={self.signed_accum:6d} "
                f"[{bit_string(self.accum)}] {self.state.value}")

    def reset(self):
        """Back to power-on state."""
        self.pc = 0
        self.accum = 0
        self.state = RunState.RUNNING
        self.steps = 0
