"""
Pullet16 Interpreter - Execution Engine

Ties together:
  - registers (regs.py)
  - word-addressed memory (memory.py)
  - opcode decoder (opcodes.py)
  - two's-complement helpers (alu.py)
  - data source for RD and output sink for WRT

Execution model, one step:
  1. If PC > max_memory: fatal (ProgramCounterError)
  2. If PC is past the loaded program: HALTED, stop with END
  3. Fetch the word at PC, decode mnemonic / indirect flag / address
  4. Run the opcode handler (unrecognized opcodes are no-ops)
  5. PC += 1, unless the handler assigned PC (BR, BAN taken) or halted (STP)

Termination reasons:
  - HALT:        STP executed
  - END:         PC ran past the last loaded word
  - STEP_LIMIT:  max_steps instructions executed without halting

Fatal conditions (AddressOutOfBoundsError, ProgramCounterError,
DataExhaustedError) are raised out of step()/run() as MachineFault
subclasses. The engine never calls sys.exit.

Address resolution lives in target_location(), so the opcode handlers never
need to know whether the address was indirect.
"""

import io
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, TextIO

from . import alu
from .config import MachineConfig, DEFAULT_CONFIG
from .faults import DataExhaustedError, MachineFault, ProgramCounterError
from .hexlit import parse_hex_literal
from .loader import read_program
from .memory import Memory, machine_state
from .opcodes import Opcode
from .regs import Registers
from .scanner import LineSource
from .word import MemoryWord

log = logging.getLogger(__name__)


class StopReason(Enum):
    HALT = 'HALT'
    END = 'END'
    STEP_LIMIT = 'STEP_LIMIT'


class Interpreter:
    """Pullet16 fetch-decode-execute engine.

    Usage:
        interp = Interpreter()
        interp.load_program(LineSource.from_file('prog.txt'))
        interp.set_data(LineSource.from_file('data.txt'))
        reason = interp.run()
        print(interp.output)    # ['WRITE OUTPUT      5 0000000000000101']
    """

    def __init__(self, config: MachineConfig = DEFAULT_CONFIG,
                 data: Optional[LineSource] = None,
                 out_stream: Optional[TextIO] = None):
        self.config = config
        self.regs = Registers()
        self.mem = Memory(config)
        self.data = data if data is not None else LineSource.empty()
        self.out_stream = out_stream if out_stream is not None else io.StringIO()

        # Every WRT record, in order
        self.output: List[str] = []

        self._trace = config.trace
        self._trace_output: List[str] = []

        # Set by handlers that assign PC themselves
        self._pc_assigned = False

        # Why the machine last halted (HALT or END); None while running
        self.stop_reason: Optional[StopReason] = None

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load_program(self, source: LineSource) -> int:
        """Read the program into memory starting at address 0."""
        count = read_program(source, self.mem)
        self.regs.reset()
        self.stop_reason = None
        if log.isEnabledFor(logging.DEBUG):
            log.debug(self.dump())
        return count

    def load_words(self, words) -> int:
        """Load pre-built MemoryWord objects (tests, embedding)."""
        self.mem.load_words(words)
        self.regs.reset()
        self.stop_reason = None
        return len(self.mem)

    def set_data(self, source: LineSource):
        self.data = source

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns StopReason if stopped, else None.

        Once halted, further calls repeat the reason the machine stopped.
        """
        regs = self.regs
        if regs.halted:
            return self.stop_reason or StopReason.HALT

        pc = regs.pc
        if pc > self.config.max_memory:
            log.error("crashing. pc too big: %d", pc)
            raise ProgramCounterError(f"program counter exceeds {self.config.max_memory}", pc)

        if pc >= len(self.mem):
            regs.halt()
            self.stop_reason = StopReason.END
            return StopReason.END

        word = self.mem.fetch(pc)
        op = word.opcode

        log.debug("EXECUTE: %4d %-3s %d %s", pc, op.value, word.indirect, word.address_bits)
        if self._trace:
            self._trace_output.append(
                f"{pc:4d}: {word.bits} {word.disassemble():12s} {regs.display()}")

        self._pc_assigned = False
        handler = self._dispatch.get(op, self._op_nop)
        try:
            handler(word)
        except MachineFault as e:
            log.error("Fault at PC %d executing %s: %s", pc, op.value, e)
            if self._trace:
                self._trace_output.append(f"  FAULT: {e}")
            raise

        regs.steps += 1
        if regs.halted:
            self.stop_reason = StopReason.HALT
            return StopReason.HALT
        if not self._pc_assigned:
            regs.pc = pc + 1
        return None

    def run(self, max_steps: Optional[int] = None) -> StopReason:
        """Run until STP, end of program, or the step limit.

        Args:
            max_steps: overrides config.max_steps for this call
                (None in both = unbounded, like the hardware).
        """
        limit = max_steps if max_steps is not None else self.config.max_steps

        while True:
            if limit is not None and self.regs.steps >= limit:
                log.warning("Step limit %d reached at PC %d", limit, self.regs.pc)
                return StopReason.STEP_LIMIT
            reason = self.step()
            if reason is not None:
                log.info("Stopped: %s after %d instructions", reason.value, self.regs.steps)
                if log.isEnabledFor(logging.DEBUG):
                    log.debug(self.dump())
                return reason

    # ══════════════════════════════════════════════
    # Address resolution
    # ══════════════════════════════════════════════

    def target_location(self, word: MemoryWord) -> int:
        """Resolve the word's target, following one level of indirection.

        Only addresses at or below the current PC resolve; anything
        above it comes back as location 0. The pointer fetch for
        indirect addressing is bounds-checked like any memory read.
        """
        target = word.address
        if target > self.regs.pc:
            return 0
        if word.is_indirect:
            return self.mem.read(target).address
        return target

    def _operand(self, word: MemoryWord) -> MemoryWord:
        """Word stored at the resolved target location."""
        return self.mem.read(self.target_location(word))

    def _jump(self, location: int):
        self.regs.pc = location
        self._pc_assigned = True

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler(word)

    def _build_dispatch(self) -> Dict[Opcode, Callable[[MemoryWord], None]]:
        """Opcode -> handler. Opcode.UNRECOGNIZED is an explicit no-op."""
        return {
            Opcode.ADD: self._op_add,
            Opcode.AND: self._op_and,
            Opcode.BAN: self._op_ban,
            Opcode.BR:  self._op_br,
            Opcode.LD:  self._op_ld,
            Opcode.RD:  self._op_rd,
            Opcode.STC: self._op_stc,
            Opcode.STP: self._op_stp,
            Opcode.SUB: self._op_sub,
            Opcode.WRT: self._op_wrt,
            Opcode.UNRECOGNIZED: self._op_nop,
        }

    # ── Arithmetic / logic ──

    def _op_add(self, word):
        """Overflow past 16 bits is not flagged; STC truncates later."""
        operand = self._operand(word)
        self.regs.accum = (alu.twos_complement(self.regs.accum)
                           + alu.twos_complement(operand.value))

    def _op_and(self, word):
        operand = self._operand(word)
        self.regs.accum &= operand.value

    def _op_sub(self, word):
        # subtrahend is the 12-bit payload only
        operand = self._operand(word)
        self.regs.accum = self.regs.accum - operand.address

    # ── Load / store ──

    def _op_ld(self, word):
        self.regs.accum = self._operand(word).address

    def _op_stc(self, word):
        location = self.target_location(word)
        stored = MemoryWord.from_int(alu.twos_complement(self.regs.accum))
        self.mem.write(location, stored)
        self.regs.accum = 0

    # ── Branch ──

    def _op_br(self, word):
        self._jump(self.target_location(word))

    def _op_ban(self, word):
        if alu.is_negative(self.regs.accum):
            self._jump(self.target_location(word))
        else:
            log.debug("the accumulator was not negative")

    # ── I/O and control ──

    def _op_rd(self, word):
        line = self.data.next_line()
        if line is None:
            log.error("Read past end of data (%s)", self.data.name)
            raise DataExhaustedError("RD past end of data", self.regs.pc)
        literal = parse_hex_literal(line)
        if literal.has_error:
            log.warning("Malformed data literal %r at data line %d: %s",
                        line, self.data.line_num, literal.error_messages)
        self.regs.accum = alu.twos_complement(literal.value)

    def _op_wrt(self, word):
        record = format_write_record(self.regs.accum)
        self.output.append(record)
        self.out_stream.write(record + "\n")

    def _op_stp(self, word):
        self.regs.halt()

    def _op_nop(self, word):
        log.debug("no-op for word %s", word.bits)

    # ══════════════════════════════════════════════
    # Trace / Debug
    # ══════════════════════════════════════════════

    def enable_trace(self, enable: bool = True):
        self._trace = enable

    def get_trace(self) -> str:
        return '\n'.join(self._trace_output)

    def clear_trace(self):
        self._trace_output.clear()

    def dump(self) -> str:
        """PC, accumulator and memory as a 'MACHINE IS NOW' block."""
        return machine_state(self.regs.pc, self.regs.accum, self.mem)

    def listing(self) -> str:
        return self.mem.listing()

    def reset(self):
        """Registers, output and trace back to their initial state. Memory is kept."""
        self.regs.reset()
        self.stop_reason = None
        self.output.clear()
        self._trace_output.clear()


def format_write_record(accum: int) -> str:
    """One WRT output line: signed value and the 16-bit pattern."""
    return f"WRITE OUTPUT      {alu.twos_complement(accum)} {alu.bit_string(accum)}"
