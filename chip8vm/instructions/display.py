"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER

# Pre-computed coordinate grids for display operations, row-major
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - XOR-draw an 8xN sprite from memory[I] at (VX, VY), wrapping at the edges."""
    sprite_x = state.V[instruction.x] % SCREEN_WIDTH
    sprite_y = state.V[instruction.y] % SCREEN_HEIGHT

    # Distance of every screen pixel from the sprite origin, measured around the wrap.
    row_offset = (yy - sprite_y) % SCREEN_HEIGHT
    col_offset = (xx - sprite_x) % SCREEN_WIDTH
    in_sprite = (row_offset < instruction.n) & (col_offset < 8)

    row_offset = jnp.where(in_sprite, row_offset, 0)
    col_offset = jnp.where(in_sprite, col_offset, 0)
    sprite_bytes = state.memory[state.I + row_offset]
    sprite = (((sprite_bytes >> (7 - col_offset)) & 1) == 1) & in_sprite

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.any(state.display & sprite))
    )
