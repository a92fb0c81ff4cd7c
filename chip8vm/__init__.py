"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import execute, fetch, load_rom, tick_timers, poll_key_wait
from chip8vm.decode import DecodedInstruction, decode, identify, disassemble
from chip8vm.interpreter import Interpreter
from chip8vm.quirks import Quirks, MODERN_QUIRKS, LEGACY_QUIRKS
from chip8vm.errors import (
    Chip8Error, RomTooLarge, UnknownOpcode, StackOverflow, StackUnderflow, MemoryAccessOutOfBounds
)
from chip8vm.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "load_rom",
    "tick_timers",
    "poll_key_wait",
    "DecodedInstruction",
    "decode",
    "identify",
    "disassemble",
    "Interpreter",
    "Quirks",
    "MODERN_QUIRKS",
    "LEGACY_QUIRKS",
    "Chip8Error",
    "RomTooLarge",
    "UnknownOpcode",
    "StackOverflow",
    "StackUnderflow",
    "MemoryAccessOutOfBounds",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_ROM_SIZE",
    "FONT_START",
    "FONT_DATA",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
]
