"""Character stats with additive percentage multipliers.

Base values for each stat are fixed when a character's stats are created.
Buffs and debuffs are applied as multipliers: percentages that stack
additively per stat (seven +10% buffs give +70%, not a compounded ~95%).
Effective values are the base scaled by the accumulated multiplier and
rounded half away from zero.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID, uuid4

import structlog

logger = structlog.get_logger(__name__)


class MissingBaseStatError(KeyError):
    """Raised when a stat is queried that has no base value configured.

    Every queried stat must be present in the base mapping; hitting this is a
    programming error, not a condition callers are expected to recover from.
    """

    pass


class Stat(StrEnum):
    """Character stats."""

    STRENGTH = "strength"
    INTELLIGENCE = "intelligence"
    SWIFTNESS = "swiftness"

    @property
    def short_name(self) -> str:
        """Three-letter code, e.g. 'str'."""
        return self.value[:3]

    @classmethod
    def from_name(cls, name: str) -> "Stat":
        """
        Look up a stat by full name or three-letter code.

        Args:
            name: Stat name such as "strength", "Strength" or "str"

        Returns:
            The matching Stat

        Raises:
            ValueError: If the name matches no stat
        """
        key = name.strip().lower()
        for stat in cls:
            if key in (stat.value, stat.short_name):
                return stat
        raise ValueError(
            f"Unknown stat '{name}' (must be one of: {', '.join(s.value for s in cls)})"
        )


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    # Compare the fraction directly; adding 0.5 first can itself round up.
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


@dataclass(frozen=True)
class Multiplier:
    """
    A percentage adjustment to a single stat.

    Values are fractions: 0.1 raises the stat by 10%, -0.1 lowers it by 10%.
    Values are not bounded; anything at or below -1.0 drives the effective
    stat to zero or below.
    """

    stat: Stat
    value: float


@dataclass(frozen=True)
class MultiplierHandle:
    """Token returned by CharacterStats.apply_multiplier for exact removal."""

    multiplier: Multiplier
    id: UUID = field(default_factory=uuid4)


class CharacterStats:
    """
    Base stats plus accumulated multipliers for one character.

    Not thread-safe; callers sharing an instance across threads must lock
    around it.
    """

    def __init__(self, base: Mapping[Stat, float]) -> None:
        self._base: dict[Stat, float] = dict(base)
        self._multipliers: dict[Stat, float] = {}
        self._applied: dict[UUID, Multiplier] = {}

    def __repr__(self) -> str:
        return f"CharacterStats(base={self._base!r}, multipliers={self._multipliers!r})"

    def get_base(self, stat: Stat) -> float:
        """
        Get the unmodified base value of a stat.

        Raises:
            MissingBaseStatError: If no base value is configured for the stat
        """
        try:
            return self._base[stat]
        except KeyError:
            logger.error("base_stat_missing", stat=str(stat))
            raise MissingBaseStatError(stat) from None

    def get_multiplier(self, stat: Stat) -> float:
        """Get the accumulated multiplier for a stat (0.0 if none applied)."""
        return self._multipliers.get(stat, 0.0)

    def get_stat(self, stat: Stat) -> int:
        """
        Get the effective value of a stat with all multipliers applied.

        Args:
            stat: The stat to compute

        Returns:
            round(base * (1 + accumulated multiplier)), ties away from zero

        Raises:
            MissingBaseStatError: If no base value is configured for the stat

        Examples:
            >>> stats = CharacterStats({Stat.STRENGTH: 10.0})
            >>> stats.add_multiplier(Multiplier(Stat.STRENGTH, 0.1))
            >>> stats.get_stat(Stat.STRENGTH)
            11
        """
        base = self.get_base(stat)
        return round_half_away_from_zero(base * (1.0 + self.get_multiplier(stat)))

    def add_multiplier(self, multiplier: Multiplier) -> None:
        """Add a multiplier's value to the accumulated multiplier for its stat."""
        total = self._multipliers.get(multiplier.stat, 0.0) + multiplier.value
        self._multipliers[multiplier.stat] = total

        logger.debug(
            "multiplier_added",
            stat=str(multiplier.stat),
            value=multiplier.value,
            total=total,
        )

    def sub_multiplier(self, multiplier: Multiplier) -> None:
        """
        Subtract a multiplier's value from the accumulated multiplier for its stat.

        The caller must pass a multiplier equal to one previously added. Nothing
        tracks which multipliers are active, so removing a value that was never
        added silently skews the stat.
        """
        total = self._multipliers.get(multiplier.stat, 0.0) - multiplier.value
        self._multipliers[multiplier.stat] = total

        logger.debug(
            "multiplier_removed",
            stat=str(multiplier.stat),
            value=multiplier.value,
            total=total,
        )

    def apply_multiplier(self, multiplier: Multiplier) -> MultiplierHandle:
        """
        Add a multiplier and return a handle that removes exactly that application.

        Args:
            multiplier: The multiplier to add

        Returns:
            Handle to pass to remove_multiplier
        """
        handle = MultiplierHandle(multiplier)
        self._applied[handle.id] = multiplier
        self.add_multiplier(multiplier)
        return handle

    def remove_multiplier(self, handle: MultiplierHandle) -> None:
        """
        Reverse a multiplier previously added with apply_multiplier.

        Raises:
            KeyError: If the handle is unknown or was already removed
        """
        multiplier = self._applied.pop(handle.id, None)
        if multiplier is None:
            raise KeyError(f"Multiplier handle {handle.id} is not active")
        self.sub_multiplier(multiplier)

    @property
    def active_handles(self) -> int:
        """Number of handle-tracked multipliers still applied."""
        return len(self._applied)

    def as_dict(self) -> dict[str, int]:
        """Effective values for every stat with a base value, keyed by stat name."""
        return {str(stat): self.get_stat(stat) for stat in self._base}
