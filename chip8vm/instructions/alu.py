"""CHIP-8 ALU operations (8xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FLAG_REGISTER


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return vy, jnp.zeros((), dtype=jnp.uint8)


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, jnp.zeros((), dtype=jnp.uint8)


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, jnp.zeros((), dtype=jnp.uint8)


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, jnp.zeros((), dtype=jnp.uint8)


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, VF = carry."""
    result = jnp.astype(vx, jnp.int32) + vy
    carry = jnp.astype(result > 255, jnp.uint8)
    return jnp.astype(result & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx, vy):
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    no_borrow = jnp.astype(vx >= vy, jnp.uint8)
    return vx - vy, no_borrow


def alu_shift_right(vx, vy):
    """8XY6 - Shift right: VX >>= 1, VF = bit shifted out."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx, vy):
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    no_borrow = jnp.astype(vy >= vx, jnp.uint8)
    return vy - vx, no_borrow


def alu_shift_left(vx, vy):
    """8XYE - Shift left: VX <<= 1, VF = bit shifted out."""
    return vx << 1, (vx >> 7) & 1


def alu_undefined(vx, vy):
    """Undefined ALU operation."""
    return vx, jnp.zeros((), dtype=jnp.uint8)


# Maps the low nibble to a branch of the switch below; 9 is the undefined slot.
_ALU_SLOTS = jnp.array([0, 1, 2, 3, 4, 5, 6, 7, 9, 9, 9, 9, 9, 9, 8, 9], dtype=jnp.int32)
_ARITHMETIC_OPS = jnp.array([0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 1, 0], dtype=jnp.bool_)
_LOGIC_OPS = jnp.array([0, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0], dtype=jnp.bool_)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    quirks = state.quirks
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]

    def _alu_shift_right(vx, vy):
        return alu_shift_right(vy if quirks.shift_uses_vy else vx, vy)

    def _alu_shift_left(vx, vy):
        return alu_shift_left(vy if quirks.shift_uses_vy else vx, vy)

    result, flag = jax.lax.switch(
        _ALU_SLOTS[instruction.n],
        [alu_set, alu_or, alu_and, alu_xor, alu_add,
         alu_sub_xy, _alu_shift_right, alu_sub_yx, _alu_shift_left, alu_undefined],
        vx, vy
    )

    writes_flag = _ARITHMETIC_OPS[instruction.n]
    if quirks.logic_resets_vf:
        writes_flag = writes_flag | _LOGIC_OPS[instruction.n]

    # Flag is written after the result so VF as destination holds the flag.
    new_V = state.V.at[instruction.x].set(result)
    new_V = new_V.at[FLAG_REGISTER].set(jnp.where(writes_flag, flag, new_V[FLAG_REGISTER]))
    return state.replace(V=new_V)
