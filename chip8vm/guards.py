"""Checks that turn faulting instructions into ``Chip8Error`` exceptions.

They run on concrete state values before the instruction kernel, which never
faults by itself (out-of-range JAX indexing clamps or drops silently).
"""

from chip8vm.constants import MEMORY_SIZE, STACK_SIZE
from chip8vm.decode import DecodedInstruction
from chip8vm.errors import MemoryAccessOutOfBounds, StackOverflow, StackUnderflow
from chip8vm.state import EmulatorState


def check_memory_range(address: int, length: int = 1) -> None:
    """Raise ``MemoryAccessOutOfBounds`` unless ``address .. address+length-1`` is addressable."""
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessOutOfBounds(address, length)


def check_fetch(state: EmulatorState) -> None:
    """The two opcode bytes at PC must both be in memory."""
    check_memory_range(int(state.pc), 2)


def check_instruction(state: EmulatorState, instruction: DecodedInstruction, mnemonic: str, address: int) -> None:
    """Validate stack depth and memory ranges touched by an identified instruction.

    Args:
        state: State after the fetch (PC already advanced)
        instruction: Decoded operands
        mnemonic: Result of ``chip8vm.decode.identify``
        address: Address the instruction was fetched from
    """
    if mnemonic == "CALL":
        depth = int(state.stack.pointer)
        if depth >= STACK_SIZE:
            raise StackOverflow(address, depth)
    elif mnemonic == "RET":
        if int(state.stack.pointer) == 0:
            raise StackUnderflow(address)
    elif mnemonic == "DRW":
        if instruction.n:
            check_memory_range(int(state.I), instruction.n)
    elif mnemonic == "LD_B_VX":
        check_memory_range(int(state.I), 3)
    elif mnemonic in ("LD_MEM_VX", "LD_VX_MEM"):
        check_memory_range(int(state.I), instruction.x + 1)
    elif mnemonic == "ADD_I_VX":
        target = int(state.I) + int(state.V[instruction.x])
        if target > 0xFFFF:
            raise MemoryAccessOutOfBounds(target)
