"""
Customization sets and their option entries.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from ..game_data.enums import CustomizeIndex, Gender, Race, SubRace


class InvalidCustomizationError(ValueError):
    """Raised when a set is requested for a clan/gender pair that has none."""
    pass


@dataclass(frozen=True)
class CustomizeData:
    """One selectable value of a customization, with its preview icon (0 = none)."""

    index: CustomizeIndex
    value: int
    icon_id: int = 0


@dataclass
class CustomizeSet:
    """Everything selectable for one clan and gender.

    `options` maps each customization to its values in menu order.
    `npc_options` holds (index, value) pairs that appear on NPCs of this
    clan and gender but are not offered to players.
    """

    clan: SubRace
    gender: Gender
    name: str = ""
    options: Dict[CustomizeIndex, List[CustomizeData]] = field(default_factory=dict)
    menu_names: Dict[CustomizeIndex, str] = field(default_factory=dict)
    npc_options: FrozenSet[Tuple[CustomizeIndex, int]] = frozenset()

    @property
    def race(self) -> Race:
        return self.clan.race

    @property
    def indices(self) -> List[CustomizeIndex]:
        """Customizations this set offers, in index order."""
        return sorted(self.options)

    def count(self, index: CustomizeIndex) -> int:
        return len(self.options.get(index, []))

    def data(self, index: CustomizeIndex, position: int) -> CustomizeData:
        """Option at a menu position. Raises IndexError/KeyError when out of range."""
        return self.options[index][position]

    def find(self, index: CustomizeIndex, value: int) -> Optional[CustomizeData]:
        for entry in self.options.get(index, []):
            if entry.value == value:
                return entry
        return None

    def is_available(self, index: CustomizeIndex, value: int) -> bool:
        """Whether players can pick this value."""
        return self.find(index, value) is not None

    def is_npc_only(self, index: CustomizeIndex, value: int) -> bool:
        return (index, value) in self.npc_options

    def option_name(self, index: CustomizeIndex) -> str:
        """Menu title of a customization, falling back to the enum name."""
        return self.menu_names.get(index) or index.name.replace("_", " ").title()
