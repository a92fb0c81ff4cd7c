"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Interpreter, MODERN_QUIRKS, LEGACY_QUIRKS


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with modern quirks."""
    return create_state(quirks=MODERN_QUIRKS)


@pytest.fixture
def legacy_state():
    """Provide a fresh state with legacy quirks."""
    return create_state(quirks=LEGACY_QUIRKS)


@pytest.fixture
def interpreter():
    """Provide an interpreter with an empty program loaded."""
    vm = Interpreter()
    vm.load(b"")
    return vm


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*words):
    """Assemble 16-bit instruction words into ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
