"""Tests for instruction decoding, identification and disassembly."""

import pytest
from chip8vm import decode, identify, disassemble, UnknownOpcode


def test_decode_fields():
    decoded = decode(0xD12F)
    assert decoded.raw == 0xD12F
    assert decoded.opcode == 0xD
    assert decoded.x == 0x1
    assert decoded.y == 0x2
    assert decoded.n == 0xF
    assert decoded.nn == 0x2F
    assert decoded.nnn == 0x12F


@pytest.mark.parametrize("instruction, mnemonic", [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1ABC, "JP"),
    (0x2ABC, "CALL"),
    (0x3A12, "SE_VX_NN"),
    (0x4A12, "SNE_VX_NN"),
    (0x5AB0, "SE_VX_VY"),
    (0x6A12, "LD_VX_NN"),
    (0x7A12, "ADD_VX_NN"),
    (0x8AB0, "LD_VX_VY"),
    (0x8AB1, "OR"),
    (0x8AB2, "AND"),
    (0x8AB3, "XOR"),
    (0x8AB4, "ADD_VX_VY"),
    (0x8AB5, "SUB"),
    (0x8AB6, "SHR"),
    (0x8AB7, "SUBN"),
    (0x8ABE, "SHL"),
    (0x9AB0, "SNE_VX_VY"),
    (0xA123, "LD_I"),
    (0xB123, "JP_OFFSET"),
    (0xCA12, "RND"),
    (0xDAB5, "DRW"),
    (0xEA9E, "SKP"),
    (0xEAA1, "SKNP"),
    (0xFA07, "LD_VX_DT"),
    (0xFA0A, "LD_VX_K"),
    (0xFA15, "LD_DT_VX"),
    (0xFA18, "LD_ST_VX"),
    (0xFA1E, "ADD_I_VX"),
    (0xFA29, "LD_F_VX"),
    (0xFA33, "LD_B_VX"),
    (0xFA55, "LD_MEM_VX"),
    (0xFA65, "LD_VX_MEM"),
])
def test_identify_known(instruction, mnemonic):
    assert identify(instruction) == mnemonic


@pytest.mark.parametrize("instruction", [
    0x0000, 0x0123, 0x00E1, 0x00FF,
    0x5AB1, 0x9AB7,
    0x8AB8, 0x8AB9, 0x8ABA, 0x8ABB, 0x8ABC, 0x8ABD, 0x8ABF,
    0xEA00, 0xEA9F,
    0xFA00, 0xFA30, 0xFA75, 0xFAFF,
])
def test_identify_unknown(instruction):
    with pytest.raises(UnknownOpcode) as excinfo:
        identify(instruction, address=0x2F0)
    assert excinfo.value.word == instruction
    assert excinfo.value.address == 0x2F0
    assert f"{instruction:04X}" in str(excinfo.value)


@pytest.mark.parametrize("instruction, text", [
    (0x00E0, "CLS"),
    (0xA200, "LD I, 0x200"),
    (0xD015, "DRW V0, V1, 5"),
    (0x8AB4, "ADD VA, VB"),
    (0x3C0F, "SE VC, 0x0F"),
    (0xF165, "LD V1, [I]"),
    (0xFF0A, "LD VF, K"),
    (0x0123, "DW 0x0123"),
])
def test_disassemble(instruction, text):
    assert disassemble(instruction) == text
