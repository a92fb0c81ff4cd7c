"""Tests for miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
import pytest
from chip8vm import execute, FONT_START


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state = fresh_state

        state = execute(state, 0x6030)  # V0 = 48
        state = execute(state, 0xF015)  # Set delay timer to V0
        assert state.delay_timer == 48

        state = execute(state, 0x6120)  # V1 = 32
        state = execute(state, 0xF118)  # Set sound timer to V1
        assert state.sound_timer == 32

        state = execute(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48


class TestBCD:
    """Test BCD conversion."""

    @pytest.mark.parametrize("value, digits", [(234, (2, 3, 4)), (156, (1, 5, 6)), (0, (0, 0, 0)),
                                               (7, (0, 0, 7)), (40, (0, 4, 0)), (255, (2, 5, 5))])
    def test_misc_bcd_conversion(self, fresh_state, value, digits):
        """FX33 - hundreds, tens and ones at I, I+1, I+2."""
        state = execute(fresh_state, 0x6000 | value)
        state = execute(state, 0xA300)
        state = execute(state, 0xF033)

        assert tuple(int(d) for d in state.memory[0x300:0x303]) == digits
        assert state.I == 0x300


class TestFont:
    """Test font character addressing."""

    def test_misc_font_character(self, fresh_state):
        """Test font character addressing."""
        state = execute(fresh_state, 0x600A)  # V0 = 0xA
        state = execute(state, 0xF029)  # I = font address for A

        assert state.I == FONT_START + 0xA * 5

    def test_font_all_characters(self, fresh_state):
        """Test font addressing for all hex digits."""
        state = fresh_state

        for digit in range(16):
            state = execute(state, 0x6000 | digit)
            state = execute(state, 0xF029)

            assert state.I == FONT_START + digit * 5, f"Font address wrong for digit {digit:X}"

    def test_font_uses_low_nibble(self, fresh_state):
        """Only the low nibble of VX selects the glyph."""
        state = execute(fresh_state, 0x603B)
        state = execute(state, 0xF029)

        assert state.I == FONT_START + 0xB * 5


class TestMemoryOperations:
    """Test store/load register operations."""

    def test_store_load_modern_mode(self, modern_state):
        """Modern quirks keep I unchanged."""
        state = modern_state

        state = execute(state, 0x6001)
        state = execute(state, 0x6102)
        state = execute(state, 0x6203)
        state = execute(state, 0x6344)  # not stored
        state = execute(state, 0xA300)

        state = execute(state, 0xF255)  # Store V0-V2
        assert state.I == 0x300
        assert [int(b) for b in state.memory[0x300:0x304]] == [1, 2, 3, 0]

        state = execute(state, 0x6000)
        state = execute(state, 0x6100)
        state = execute(state, 0x6200)

        state = execute(state, 0xF165)  # Load V0-V1
        assert state.V[0] == 1
        assert state.V[1] == 2
        assert state.V[2] == 0  # outside the range
        assert state.I == 0x300

    def test_store_load_legacy_mode(self, legacy_state):
        """Legacy quirks leave I at I + X + 1."""
        state = legacy_state

        state = execute(state, 0x6001)
        state = execute(state, 0x6102)
        state = execute(state, 0xA400)

        state = execute(state, 0xF155)
        assert state.I == 0x400 + 2

        state = execute(state, 0xA400)
        state = execute(state, 0x6000)
        state = execute(state, 0x6100)

        state = execute(state, 0xF165)
        assert state.V[0] == 1
        assert state.V[1] == 2
        assert state.I == 0x400 + 2

    def test_store_all_registers(self, fresh_state):
        """FX55 with X = F writes all sixteen registers."""
        state = fresh_state.replace(V=fresh_state.V.at[15].set(0xEE).at[0].set(0x11))
        state = execute(state, 0xA500)
        state = execute(state, 0xFF55)

        assert state.memory[0x500] == 0x11
        assert state.memory[0x50F] == 0xEE


class TestWaitForKey:
    """Test FX0A."""

    def test_wait_for_key_without_key(self, fresh_state):
        """No key down: flag set, PC rewound onto the instruction."""
        state = fresh_state.replace(pc=fresh_state.pc + 2)  # as after fetching from 0x200

        state = execute(state, 0xF30A)

        assert state.pc == 0x200
        assert state.awaiting_key
        assert state.key_register == 3

    def test_wait_for_key_with_key_down(self, fresh_state):
        """A key already down completes the instruction at once."""
        state = fresh_state.replace(keypad=fresh_state.keypad.at[7].set(True))
        initial_pc = state.pc

        state = execute(state, 0xF00A)

        assert state.V[0] == 7
        assert state.V.dtype == jnp.uint8
        assert state.pc == initial_pc
        assert not state.awaiting_key


class TestAddToIndex:
    """Test FX1E."""

    def test_add_to_index(self, fresh_state):
        state = execute(fresh_state, 0x6010)
        state = execute(state, 0xA300)
        state = execute(state, 0xF01E)

        assert state.I == 0x310
        assert state.V[15] == 0

    def test_add_to_index_past_12_bits(self, fresh_state):
        """I is a 16-bit register; VF is untouched."""
        state = execute(fresh_state, 0x60FF)
        state = execute(state, 0xAF80)
        state = execute(state, 0xF01E)

        assert state.I == 0x107F
        assert state.V[15] == 0
