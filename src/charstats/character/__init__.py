"""Character stats and multipliers."""

from .presets import StatPreset, build_character_stats, load_presets
from .stats import (
    CharacterStats,
    MissingBaseStatError,
    Multiplier,
    MultiplierHandle,
    Stat,
    round_half_away_from_zero,
)

__all__ = [
    "CharacterStats",
    "MissingBaseStatError",
    "Multiplier",
    "MultiplierHandle",
    "Stat",
    "StatPreset",
    "build_character_stats",
    "load_presets",
    "round_half_away_from_zero",
]
