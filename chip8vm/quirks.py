"""Behaviour switches for the instructions historical interpreters disagree on."""

import dataclasses


@dataclasses.dataclass(frozen=True)
class Quirks:
    """Construction-time selection of legacy or modern instruction semantics.

    Attributes:
        shift_uses_vy: 8XY6/8XYE shift VY and store the result in VX
        load_store_increments_i: FX55/FX65 leave I pointing past the last register
        logic_resets_vf: 8XY1/8XY2/8XY3 clear VF
        jump_uses_vx: BXNN jumps to XNN + VX instead of NNN + V0
    """
    shift_uses_vy: bool = False
    load_store_increments_i: bool = False
    logic_resets_vf: bool = False
    jump_uses_vx: bool = False

    @staticmethod
    def preset(name: str) -> "Quirks":
        """Resolve a preset name ("modern" or "legacy")."""
        presets = {"modern": MODERN_QUIRKS, "legacy": LEGACY_QUIRKS}
        if name not in presets:
            raise ValueError(
                f"Unknown quirks preset '{name}'. Available: {list(presets.keys())}"
            )
        return presets[name]


MODERN_QUIRKS = Quirks()

LEGACY_QUIRKS = Quirks(
    shift_uses_vy=True,
    load_store_increments_i=True,
    logic_resets_vf=True,
)
