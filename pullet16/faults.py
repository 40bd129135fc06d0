"""
Pullet16 Interpreter - Fatal Machine Faults

Every condition that kills a Pullet16 run is raised as a MachineFault
subclass. The interpreter never exits the process itself; the CLI driver
(p16run.py) catches MachineFault and turns it into exit status 1.

Malformed signed-hex data literals are NOT faults. They are flagged on the
HexLiteral object instead (see hexlit.py).
"""


class MachineFault(Exception):
    """Base class for unrecoverable Pullet16 errors."""
    def __init__(self, message: str, pc: int = None):
        self.pc = pc
        super().__init__(f"PC {pc}: {message}" if pc is not None else message)


class AddressOutOfBoundsError(MachineFault):
    """Memory referenced outside the loaded, addressable range."""
    def __init__(self, address: int, pc: int = None):
        self.address = address
        super().__init__(f"address {address} out of bounds", pc)


class ProgramCounterError(MachineFault):
    """Program counter went past the top of the address space."""
    pass


class DataExhaustedError(MachineFault):
    """RD executed with no data lines left."""
    pass


class WordFormatError(MachineFault):
    """A program line is not a 16-character bit string."""
    def __init__(self, message: str, line_num: int = 0, line_text: str = ""):
        self.line_num = line_num
        self.line_text = line_text
        super().__init__(f"Line {line_num}: {message}" if line_num else message)


class MemoryCapacityError(MachineFault):
    """Program has more words than the address space can hold."""
    pass
