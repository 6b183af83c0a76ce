"""
Stat preset loader for charstats.

Handles loading named base-stat archetypes (warrior, scholar, ...) from YAML
files and turning them into CharacterStats.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from charstats.character.stats import CharacterStats, Stat
from charstats.config import get_settings

logger = structlog.get_logger(__name__)


class PresetLoadError(Exception):
    """Raised when there's an error loading preset data."""

    pass


class PresetValidationError(Exception):
    """Raised when preset validation fails."""

    pass


class StatPreset(BaseModel):
    """
    Base-stat archetype loaded from YAML data.

    Attributes:
        id: Unique identifier for the preset (e.g., "warrior")
        name: Display name (e.g., "Warrior")
        description: Optional flavour text
        base: Base value per stat; keys may be full names or short codes
    """

    id: str = Field(..., description="Unique preset identifier")
    name: str = Field(..., description="Display name of the preset")
    description: str = Field(default="", description="Preset description")
    base: dict[Stat, float] = Field(..., description="Base value per stat")

    @field_validator("base", mode="before")
    @classmethod
    def _normalise_stat_names(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        normalised: dict[Any, Any] = {}
        for key, amount in value.items():
            stat = Stat.from_name(key) if isinstance(key, str) else key
            if stat in normalised:
                raise ValueError(f"Stat '{stat}' is listed more than once")
            normalised[stat] = amount
        return normalised

    def to_character_stats(self) -> CharacterStats:
        """Create fresh CharacterStats from this preset's base values."""
        return CharacterStats(self.base)


def load_yaml_file(file_path: Path) -> list[dict[str, Any]]:
    """
    Load a YAML file containing preset definitions.

    Args:
        file_path: Path to the YAML file

    Returns:
        List of preset dictionaries

    Raises:
        PresetLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PresetLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError as e:
        raise PresetLoadError(f"File not found: {file_path}") from e
    except OSError as e:
        raise PresetLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise PresetLoadError(f"Empty YAML file: {file_path}")

    if not isinstance(data, dict) or "presets" not in data:
        raise PresetLoadError(f"Missing 'presets' key in {file_path}")

    presets = data["presets"]
    if not isinstance(presets, list):
        raise PresetLoadError(f"'presets' must be a list in {file_path}")

    return presets


def load_presets(file_path: Path | None = None) -> dict[str, StatPreset]:
    """
    Load and validate all presets from a YAML file.

    Args:
        file_path: Optional path to the presets file. If None, uses the
            configured presets file.

    Returns:
        Dictionary mapping preset IDs to StatPreset objects

    Raises:
        PresetLoadError: If the file cannot be loaded or parsed
        PresetValidationError: If a preset is invalid or an ID is duplicated
    """
    if file_path is None:
        file_path = get_settings().presets_file

    presets: dict[str, StatPreset] = {}

    for preset_data in load_yaml_file(file_path):
        if not isinstance(preset_data, dict):
            raise PresetValidationError(f"Preset entry in {file_path} must be a mapping")

        preset_id = preset_data.get("id", "unknown")
        try:
            preset = StatPreset(**preset_data)
        except ValidationError as e:
            raise PresetValidationError(
                f"Preset '{preset_id}' in {file_path} is invalid: {e}"
            ) from e

        if preset.id in presets:
            raise PresetValidationError(f"Duplicate preset id '{preset.id}' in {file_path}")

        presets[preset.id] = preset

    logger.info("presets_loaded", path=str(file_path), count=len(presets))

    return presets


def build_character_stats(preset_id: str, presets: dict[str, StatPreset]) -> CharacterStats:
    """
    Create CharacterStats for a named preset.

    Raises:
        KeyError: If no preset has the given ID
    """
    if preset_id not in presets:
        raise KeyError(f"Unknown preset: {preset_id}")
    return presets[preset_id].to_character_stats()
