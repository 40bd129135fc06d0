"""
Pullet16 Interpreter - Word-Addressed Memory

Memory is a list of MemoryWord, one per program line, addressed from 0.
Its size is fixed once loading is done: STC replaces existing words but
never grows the table.

Bounds rule for every access (read, write, indirect pointer fetch):

    min_location <= address <= max_memory   and   address < len(memory)

min_location is 0, or 1 in strict mode (MachineConfig.allow_location_zero
= False). The second clause is the loaded size: an address inside the
12-bit space but past the end of the program has no word behind it.
"""

import logging
from typing import List, Iterator

from .alu import twos_complement, bit_string
from .config import MachineConfig, DEFAULT_CONFIG
from .faults import AddressOutOfBoundsError, MemoryCapacityError
from .word import MemoryWord

log = logging.getLogger(__name__)


class Memory:
    """Address-indexed table of MemoryWord."""

    WORDS_PER_ROW = 4

    def __init__(self, config: MachineConfig = DEFAULT_CONFIG):
        self.config = config
        self._words: List[MemoryWord] = []

    # --- loading ---

    @property
    def capacity(self) -> int:
        return self.config.max_memory + 1

    def append(self, word: MemoryWord) -> int:
        """Place word at the next free address and return that address."""
        address = len(self._words)
        if address >= self.capacity:
            raise MemoryCapacityError(
                f"program exceeds {self.capacity} words of memory")
        self._words.append(word)
        return address

    def clear(self):
        """Drop every word so the next append lands at address 0."""
        self._words.clear()

    def load_words(self, words):
        """Bulk load of pre-built words (tests, embedding). Clears memory first."""
        self.clear()
        for word in words:
            self.append(word)

    # --- bounds ---

    def in_bounds(self, address: int) -> bool:
        return (self.config.min_location <= address <= self.config.max_memory
                and address < len(self._words))

    def check_address(self, address: int):
        """Raise AddressOutOfBoundsError unless address may be accessed."""
        if not self.in_bounds(address):
            log.error("The address was out of bounds: %d (memory size %d)",
                      address, len(self._words))
            raise AddressOutOfBoundsError(address)

    # --- access ---

    def read(self, address: int) -> MemoryWord:
        self.check_address(address)
        return self._words[address]

    def write(self, address: int, word: MemoryWord):
        self.check_address(address)
        self._words[address] = word

    def fetch(self, pc: int) -> MemoryWord:
        """Instruction fetch. The caller has already checked pc < len(self)."""
        return self._words[pc]

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[MemoryWord]:
        return iter(self._words)

    def __getitem__(self, address: int) -> MemoryWord:
        return self._words[address]

    # --- display ---

    def dump(self) -> str:
        """Memory rows, four words per line:  MEM    0-   3 <w0> <w1> <w2> <w3>"""
        lines = []
        size = len(self._words)
        for start in range(0, size, self.WORDS_PER_ROW):
            row = ' '.join(w.bits for w in self._words[start:start + self.WORDS_PER_ROW])
            lines.append(f"MEM {start:4d}-{start + self.WORDS_PER_ROW - 1:4d} {row}")
        return '\n'.join(lines)

    def listing(self) -> str:
        """Program listing: address, bits, signed value, disassembly."""
        lines = []
        for addr, word in enumerate(self._words):
            lines.append(f"{addr:4d}  {word.bits}  {twos_complement(word.value):6d}  "
                         f"{word.disassemble()}")
        return '\n'.join(lines)


def machine_state(pc: int, accum: int, memory: Memory) -> str:
    """Full 'MACHINE IS NOW' block used by the trace log and --dump."""
    stars = "********* " * 8
    parts = [
        "",
        stars,
        "MACHINE IS NOW",
        f"PC    {pc:8d}",
        f"ACCUM {twos_complement(accum):8d} {bit_string(accum)}",
        "",
    ]
    body = memory.dump()
    if body:
        parts.append(body)
    parts.append("")
    parts.append(stars)
    return '\n'.join(parts)
