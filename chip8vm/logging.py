"""Console logging utilities for the CHIP-8 interpreter.

Provides a small levelled console logger with optional colours and elapsed-time
stamps, plus a formatter for dumping machine state while debugging ROMs.
"""

import time
import sys

from chip8vm.state import EmulatorState


LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_ANSI_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_ANSI_RESET = "\033[0m"


class ConsoleLogger:
    """Console logger with level filtering and optional ANSI colours.

    Colours are only used when stdout is a terminal. Timestamps are seconds
    since the logger was created.
    """

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def is_enabled_for(self, level: str) -> bool:
        """Unknown level names rank as INFO."""
        rank = {name: i for i, name in enumerate(LEVELS)}
        return rank.get(level.upper(), 1) >= rank.get(self.log_level, 1)

    def _format_message(self, level: str, message: str) -> str:
        prefix = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        level_tag = f"[{level:>8s}]"
        if self.use_colors:
            level_tag = f"{_ANSI_COLORS.get(level.upper(), '')}{level_tag}{_ANSI_RESET}"
        return f"{prefix}{level_tag}[{self.name}] {message}"

    def log(self, level: str, message: str):
        if self.is_enabled_for(level):
            print(self._format_message(level, message), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def log_state(self, state: EmulatorState, level: str = "DEBUG"):
        """Log registers, timers and stack of an emulator state."""
        if not self.is_enabled_for(level):
            return
        for line in format_state(state).splitlines():
            self.log(level, line)


def format_state(state: EmulatorState) -> str:
    """Render the CPU-visible part of a state as a few lines of text."""
    depth = int(state.stack.pointer)
    stack = " ".join(f"{int(a):03X}" for a in state.stack.data[:depth]) or "-"
    lines = [
        f"PC: 0x{int(state.pc):03X}  I: 0x{int(state.I):03X}  "
        f"DT: {int(state.delay_timer)}  ST: {int(state.sound_timer)}",
    ]
    for row in range(0, 16, 8):
        lines.append(" ".join(f"V{j:X}:{int(state.V[j]):02X}" for j in range(row, row + 8)))
    lines.append(f"Stack: {stack}")
    if bool(state.awaiting_key):
        lines.append(f"Waiting for key -> V{int(state.key_register):X}")
    return "\n".join(lines)
