"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FONT_START, FONT_GLYPH_SIZE, NUM_REGISTERS
from chip8vm.instructions.system import no_op


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    return state.replace(I=state.I + jnp.astype(state.V[instruction.x], jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    Completes immediately when a key is already down. Otherwise the state is
    marked as awaiting a key and the program counter is moved back onto this
    instruction; see ``chip8vm.emulator.poll_key_wait``.
    """
    def key_pressed_action(state):
        pressed_key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
        return state.replace(V=state.V.at[instruction.x].set(pressed_key))

    def wait_action(state):
        return state.replace(
            pc=state.pc - 2,
            awaiting_key=jnp.ones((), dtype=jnp.bool_),
            key_register=jnp.astype(instruction.x, jnp.uint8),
        )

    return jax.lax.cond(jnp.any(state.keypad), key_pressed_action, wait_action, state)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = jnp.astype(state.V[instruction.x] & 0xF, jnp.uint16)
    return state.replace(I=FONT_START + digit * FONT_GLYPH_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]

    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    indices = jnp.arange(3) + state.I
    new_memory = state.memory.at[indices].set(digits)
    return state.replace(memory=new_memory)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    base_indices = state.I + jnp.arange(NUM_REGISTERS)
    current_memory_values = state.memory[base_indices]
    new_memory_values = jnp.where(register_mask, state.V, current_memory_values)
    new_memory = state.memory.at[base_indices].set(new_memory_values)

    if state.quirks.load_store_increments_i:
        return state.replace(memory=new_memory, I=jnp.astype(state.I + instruction.x + 1, jnp.uint16))
    return state.replace(memory=new_memory)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    base_indices = state.I + jnp.arange(NUM_REGISTERS)
    memory_values = state.memory[base_indices]
    new_V = jnp.where(register_mask, memory_values, state.V)

    if state.quirks.load_store_increments_i:
        return state.replace(V=new_V, I=jnp.astype(state.I + instruction.x + 1, jnp.uint16))
    return state.replace(V=new_V)


# Maps the low byte of an Fxxx word to a branch of the switch below; 9 is no-op.
_MISC_SLOTS = jnp.full(256, 9, dtype=jnp.int32).at[
    jnp.array([0x07, 0x0A, 0x15, 0x18, 0x1E, 0x29, 0x33, 0x55, 0x65])
].set(jnp.arange(9, dtype=jnp.int32))


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    return jax.lax.switch(
        _MISC_SLOTS[instruction.nn],
        [
            execute_get_delay_timer,
            execute_wait_for_key,
            execute_set_delay_timer,
            execute_set_sound_timer,
            execute_add_to_index,
            execute_font_character,
            execute_bcd_conversion,
            execute_store_registers,
            execute_load_registers,
            no_op,
        ],
        state, instruction
    )
