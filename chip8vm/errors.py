"""Fatal CHIP-8 interpreter errors."""

from typing import Optional


class Chip8Error(Exception):
    """Base class for errors that end the current run."""


class RomTooLarge(Chip8Error):
    """ROM does not fit in program memory."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"ROM is {size} bytes, program space holds {limit}")


class UnknownOpcode(Chip8Error):
    """Instruction word matches no CHIP-8 instruction."""

    def __init__(self, word: int, address: Optional[int] = None):
        self.word = word
        self.address = address
        location = f" at 0x{address:03X}" if address is not None else ""
        super().__init__(f"Unknown opcode 0x{word:04X}{location}")


class StackOverflow(Chip8Error):
    """CALL with all stack slots in use."""

    def __init__(self, address: int, depth: int):
        self.address = address
        self.depth = depth
        super().__init__(f"Stack overflow at 0x{address:03X} (depth {depth})")


class StackUnderflow(Chip8Error):
    """RET with an empty stack."""

    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Stack underflow at 0x{address:03X}")


class MemoryAccessOutOfBounds(Chip8Error):
    """Computed address falls outside the 4096-byte address space."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        if length == 1:
            message = f"Memory access out of bounds: 0x{address:04X}"
        else:
            message = (f"Memory access out of bounds: 0x{address:04X}"
                       f"-0x{address + length - 1:04X}")
        super().__init__(message)
