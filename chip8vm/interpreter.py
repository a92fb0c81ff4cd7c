"""Stateful, checked CHIP-8 interpreter for hosts."""

import operator
from typing import Optional, Union

import jax
import numpy as np

from chip8vm.constants import NUM_KEYS, PROGRAM_START
from chip8vm.decode import decode, identify, disassemble
from chip8vm.emulator import execute, fetch, load_rom, tick_timers, poll_key_wait
from chip8vm.errors import Chip8Error
from chip8vm.guards import check_fetch, check_instruction, check_memory_range
from chip8vm.logging import ConsoleLogger
from chip8vm.quirks import Quirks
from chip8vm.state import EmulatorState, create_state

_execute = jax.jit(execute)
_tick_timers = jax.jit(tick_timers)
_poll_key_wait = jax.jit(poll_key_wait)


class Interpreter:
    """CHIP-8 virtual machine driven one instruction at a time by its host.

    The host loads a ROM, then calls ``step()`` at its instruction rate and
    ``tick_timers()`` at 60 Hz. Between calls it reads ``display`` and
    ``sound_active`` and reports keys with ``set_key()``. The interpreter
    performs no I/O of its own besides logging.

    Any fault raises a ``chip8vm.errors.Chip8Error`` and leaves the machine
    exactly as it was before the failing call.
    """

    def __init__(
        self,
        quirks: Union[Quirks, str] = "modern",
        seed: int = 0,
        logger: Optional[ConsoleLogger] = None,
    ):
        """Create a machine with zeroed memory, registers and display.

        Args:
            quirks: ``Quirks`` instance or preset name ("modern", "legacy")
            seed: Seed of the PRNG used by CXNN
            logger: Logger for load/trace/fault messages; defaults to a
                WARNING-level ``ConsoleLogger``
        """
        if isinstance(quirks, str):
            quirks = Quirks.preset(quirks)
        self.quirks = quirks
        self.seed = seed
        self.logger = logger if logger is not None else ConsoleLogger("chip8vm", log_level="WARNING")
        self._rom: Optional[bytes] = None
        self._state = create_state(jax.random.PRNGKey(seed), quirks)

    def load(self, rom_bytes: bytes) -> None:
        """Reset the machine and copy a ROM image to 0x200.

        Raises:
            RomTooLarge: if the image exceeds 3584 bytes
            TypeError: if ``rom_bytes`` is an int or str
        """
        if isinstance(rom_bytes, (int, str)):
            raise TypeError(f"ROM image must be bytes, got {type(rom_bytes).__name__}")
        rom = bytes(rom_bytes)
        state = create_state(jax.random.PRNGKey(self.seed), self.quirks)
        try:
            self._state = load_rom(state, rom)
        except Chip8Error as e:
            self.logger.error(str(e))
            raise
        self._rom = rom
        self.logger.info(f"Loaded ROM ({len(rom)} bytes) at 0x{PROGRAM_START:03X}")

    def reset(self) -> None:
        """Restart the loaded ROM from a fresh machine state."""
        if self._rom is None:
            raise RuntimeError("No ROM loaded")
        self.load(self._rom)
        self.logger.info("Reset")

    def step(self) -> Optional[int]:
        """Execute one instruction.

        Returns:
            The executed opcode, or ``None`` while an FX0A key wait is pending.
        """
        if self._rom is None:
            raise RuntimeError("step() called before load()")

        state = self._state
        if bool(state.awaiting_key):
            self._state = _poll_key_wait(state)
            if not bool(self._state.awaiting_key):
                self.logger.debug(f"Key wait finished: V{int(state.key_register):X} = {int(self._state.V[int(state.key_register)]):X}")
            return None

        address = int(state.pc)
        try:
            check_fetch(state)
            state, instruction = fetch(state)
            opcode = int(instruction)
            mnemonic = identify(opcode, address)
            decoded = decode(opcode)
            check_instruction(state, decoded, mnemonic, address)
        except Chip8Error as e:
            self.logger.error(str(e))
            self.logger.log_state(self._state, level="ERROR")
            raise

        if self.logger.is_enabled_for("DEBUG"):
            self.logger.debug(f"0x{address:04X}: {opcode:04X}  {disassemble(opcode)}")
        self._state = _execute(state, opcode)
        if mnemonic == "LD_VX_K" and bool(self._state.awaiting_key):
            self.logger.debug(f"Waiting for key -> V{decoded.x:X}")
        return opcode

    def tick_timers(self) -> None:
        """Decrement delay and sound timers; call at 60 Hz."""
        self._state = _tick_timers(self._state)

    def set_key(self, key: int, pressed: bool) -> None:
        """Record the current state of keypad key 0x0-0xF."""
        key = operator.index(key)
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key must be in 0x0-0xF, got {key!r}")
        self._state = self._state.replace(keypad=self._state.keypad.at[key].set(bool(pressed)))

    def read_byte(self, address: int) -> int:
        """Read one byte of memory."""
        check_memory_range(address)
        return int(self._state.memory[address])

    def write_byte(self, address: int, value: int) -> None:
        """Write one byte of memory; nothing below 0x200 is protected."""
        check_memory_range(address)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value must be in 0-255, got {value!r}")
        self._state = self._state.replace(memory=self._state.memory.at[address].set(value))

    @property
    def state(self) -> EmulatorState:
        return self._state

    @property
    def display(self) -> np.ndarray:
        """Read-only (32, 64) boolean pixel grid, indexed ``[y, x]``."""
        display = np.array(self._state.display, dtype=np.bool_)
        display.flags.writeable = False
        return display

    @property
    def sound_active(self) -> bool:
        return int(self._state.sound_timer) > 0

    @property
    def keypad(self) -> tuple[bool, ...]:
        return tuple(bool(k) for k in np.asarray(self._state.keypad))

    @property
    def V(self) -> np.ndarray:
        return np.array(self._state.V, dtype=np.uint8)

    @property
    def I(self) -> int:
        return int(self._state.I)

    @property
    def pc(self) -> int:
        return int(self._state.pc)

    @property
    def delay_timer(self) -> int:
        return int(self._state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self._state.sound_timer)

    @property
    def stack(self) -> list[int]:
        """Return addresses, oldest first."""
        depth = int(self._state.stack.pointer)
        return [int(a) for a in np.asarray(self._state.stack.data)[:depth]]

    @property
    def awaiting_key(self) -> bool:
        return bool(self._state.awaiting_key)
