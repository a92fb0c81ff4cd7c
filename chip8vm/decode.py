"""CHIP-8 instruction decoding."""

from typing import Optional

from chex import dataclass

from chip8vm.errors import UnknownOpcode


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


# (mask, pattern, mnemonic, assembly template); first match wins.
INSTRUCTION_TABLE = (
    (0xFFFF, 0x00E0, "CLS", "CLS"),
    (0xFFFF, 0x00EE, "RET", "RET"),
    (0xF000, 0x1000, "JP", "JP 0x{nnn:03X}"),
    (0xF000, 0x2000, "CALL", "CALL 0x{nnn:03X}"),
    (0xF000, 0x3000, "SE_VX_NN", "SE V{x:X}, 0x{nn:02X}"),
    (0xF000, 0x4000, "SNE_VX_NN", "SNE V{x:X}, 0x{nn:02X}"),
    (0xF00F, 0x5000, "SE_VX_VY", "SE V{x:X}, V{y:X}"),
    (0xF000, 0x6000, "LD_VX_NN", "LD V{x:X}, 0x{nn:02X}"),
    (0xF000, 0x7000, "ADD_VX_NN", "ADD V{x:X}, 0x{nn:02X}"),
    (0xF00F, 0x8000, "LD_VX_VY", "LD V{x:X}, V{y:X}"),
    (0xF00F, 0x8001, "OR", "OR V{x:X}, V{y:X}"),
    (0xF00F, 0x8002, "AND", "AND V{x:X}, V{y:X}"),
    (0xF00F, 0x8003, "XOR", "XOR V{x:X}, V{y:X}"),
    (0xF00F, 0x8004, "ADD_VX_VY", "ADD V{x:X}, V{y:X}"),
    (0xF00F, 0x8005, "SUB", "SUB V{x:X}, V{y:X}"),
    (0xF00F, 0x8006, "SHR", "SHR V{x:X}, V{y:X}"),
    (0xF00F, 0x8007, "SUBN", "SUBN V{x:X}, V{y:X}"),
    (0xF00F, 0x800E, "SHL", "SHL V{x:X}, V{y:X}"),
    (0xF00F, 0x9000, "SNE_VX_VY", "SNE V{x:X}, V{y:X}"),
    (0xF000, 0xA000, "LD_I", "LD I, 0x{nnn:03X}"),
    (0xF000, 0xB000, "JP_OFFSET", "JP V0, 0x{nnn:03X}"),
    (0xF000, 0xC000, "RND", "RND V{x:X}, 0x{nn:02X}"),
    (0xF000, 0xD000, "DRW", "DRW V{x:X}, V{y:X}, {n}"),
    (0xF0FF, 0xE09E, "SKP", "SKP V{x:X}"),
    (0xF0FF, 0xE0A1, "SKNP", "SKNP V{x:X}"),
    (0xF0FF, 0xF007, "LD_VX_DT", "LD V{x:X}, DT"),
    (0xF0FF, 0xF00A, "LD_VX_K", "LD V{x:X}, K"),
    (0xF0FF, 0xF015, "LD_DT_VX", "LD DT, V{x:X}"),
    (0xF0FF, 0xF018, "LD_ST_VX", "LD ST, V{x:X}"),
    (0xF0FF, 0xF01E, "ADD_I_VX", "ADD I, V{x:X}"),
    (0xF0FF, 0xF029, "LD_F_VX", "LD F, V{x:X}"),
    (0xF0FF, 0xF033, "LD_B_VX", "LD B, V{x:X}"),
    (0xF0FF, 0xF055, "LD_MEM_VX", "LD [I], V{x:X}"),
    (0xF0FF, 0xF065, "LD_VX_MEM", "LD V{x:X}, [I]"),
)


def _lookup(instruction: int) -> Optional[tuple[str, str]]:
    for mask, pattern, mnemonic, template in INSTRUCTION_TABLE:
        if instruction & mask == pattern:
            return mnemonic, template
    return None


def identify(instruction: int, address: Optional[int] = None) -> str:
    """Return the mnemonic of a 16-bit instruction word.

    Raises:
        UnknownOpcode: if the word is not a CHIP-8 instruction
    """
    match = _lookup(instruction)
    if match is None:
        raise UnknownOpcode(instruction, address)
    return match[0]


def disassemble(instruction: int) -> str:
    """Render an instruction word as assembly text, e.g. ``LD I, 0x200``."""
    match = _lookup(instruction)
    if match is None:
        return f"DW 0x{instruction:04X}"
    decoded = decode(instruction)
    return match[1].format(x=decoded.x, y=decoded.y, n=decoded.n, nn=decoded.nn, nnn=decoded.nnn)
