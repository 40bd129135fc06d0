"""
Pullet16 Interpreter - Program Loader

Reads the ASCII 'executable' one line at a time, turns each line into a
MemoryWord and stores it at the next address, starting from 0. Whatever
was loaded before is dropped first. Loading stops when the source runs out.

Opcodes are not checked here. A word that will not decode only matters
if execution reaches it (and then it is a no-op).
"""

import logging

from .memory import Memory
from .scanner import LineSource
from .word import MemoryWord

log = logging.getLogger(__name__)


def read_program(source: LineSource, memory: Memory) -> int:
    """Replace memory with every remaining line of source. Returns the word count.

    Raises WordFormatError for a line that is not a 16-bit string and
    MemoryCapacityError when the program does not fit the address space.
    """
    memory.clear()
    count = 0
    for line in source:
        word = MemoryWord.from_text(line, source.line_num)
        address = memory.append(word)
        count += 1
        log.debug("READ %d %d %s", source.line_num, address, line)
    log.info("Loaded %d words from %s", count, source.name)
    return count
