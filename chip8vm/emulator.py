"""Main CHIP-8 emulator execution engine.

These functions are pure: each takes an ``EmulatorState`` and returns a new
one. They perform no validation, so they can be traced by ``jax.jit``; the
checked, stateful entry point is ``chip8vm.interpreter.Interpreter``.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import decode
from chip8vm.constants import PROGRAM_START, MAX_ROM_SIZE
from chip8vm.errors import RomTooLarge
from chip8vm.instructions.system import execute_system_instruction
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import execute_misc_instruction


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)

    return jax.lax.switch(
        decoded_instruction.opcode,
        [
            execute_system_instruction,
            execute_jump,
            execute_call,
            execute_skip_if_equal_immediate,
            execute_skip_if_not_equal_immediate,
            execute_skip_if_equal_register,
            execute_set,
            execute_add,
            execute_alu_operation,
            execute_skip_if_not_equal_register,
            execute_set_index,
            execute_jump_with_offset,
            execute_random,
            execute_display,
            execute_skip_if_key,
            execute_misc_instruction,
        ],
        state, decoded_instruction
    )


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: EmulatorState) -> tuple[EmulatorState, jnp.uint16]:
    """Fetch next instruction from memory and advance the program counter."""
    instruction = _pack_u16(state.memory[state.pc], state.memory[state.pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def load_rom(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Copy ROM bytes into CHIP-8 memory starting at 0x200."""
    rom = bytes(rom)
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom), MAX_ROM_SIZE)
    if not rom:
        return state
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    return state.replace(memory=new_memory)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def poll_key_wait(state: EmulatorState) -> EmulatorState:
    """Finish a pending FX0A once any key is down.

    The lowest pressed key is stored in the waiting register and the program
    counter moves past the FX0A instruction. With no key down the state is
    returned unchanged.
    """
    def resume(state):
        pressed_key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
        return state.replace(
            V=state.V.at[state.key_register].set(pressed_key),
            pc=state.pc + 2,
            awaiting_key=jnp.zeros((), dtype=jnp.bool_),
        )

    return jax.lax.cond(state.awaiting_key & jnp.any(state.keypad), resume, lambda s: s, state)
