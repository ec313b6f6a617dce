"""
Customization data of non-player characters.

NPCs can use customization values players cannot pick (extra hairstyles,
face paints and so on). The table is read once from the export and handed
to the customization factory, which marks such values per clan and gender.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, cast

import orjson

from .enums import CustomizeIndex, Gender, SubRace

logger = logging.getLogger(__name__)


@dataclass
class NpcData:
    """A single NPC appearance."""

    name: str
    kind: str = "event"
    customize: Dict[CustomizeIndex, int] = field(default_factory=dict)

    @property
    def clan(self) -> SubRace:
        try:
            return SubRace(self.customize.get(CustomizeIndex.CLAN, 0))
        except ValueError:
            return SubRace.UNKNOWN

    @property
    def gender(self) -> Gender:
        # Customize data stores gender zero based.
        raw = self.customize.get(CustomizeIndex.GENDER, -1) + 1
        try:
            return Gender(raw)
        except ValueError:
            return Gender.UNKNOWN

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NpcData":
        """Create NpcData from its JSON form.

        Unknown customize keys are ignored so newer exports stay readable.
        """
        customize: Dict[CustomizeIndex, int] = {}
        raw_customize = cast(Dict[str, Any], data.get("customize") or {})
        for key, value in raw_customize.items():
            try:
                customize[CustomizeIndex.from_name(key)] = int(value)
            except (ValueError, TypeError):
                logger.debug(f"Ignoring customize entry {key}={value!r} of {data.get('name')}")
        return cls(
            name=str(data.get("name", "")),
            kind=str(data.get("kind", "event")),
            customize=customize,
        )


class NpcCustomizeSet:
    """All known NPC appearances, in load order."""

    def __init__(self, npcs: List[NpcData] | None = None):
        self._npcs: List[NpcData] = list(npcs or [])

    def __iter__(self) -> Iterator[NpcData]:
        return iter(self._npcs)

    def __len__(self) -> int:
        return len(self._npcs)

    @classmethod
    def load(cls, path: str | Path) -> "NpcCustomizeSet":
        """Read the NPC table; a missing file yields an empty set."""
        path = Path(path)
        if not path.is_file():
            logger.warning(f"NPC customization table not found: {path}")
            return cls()

        with path.open("rb") as f:
            data = orjson.loads(f.read())

        raw_entries: List[Any] = data if isinstance(data, list) else [data]
        npcs = [
            NpcData.from_dict(cast(Dict[str, Any], entry))
            for entry in raw_entries
            if isinstance(entry, dict)
        ]
        logger.info(f"Loaded {len(npcs)} NPC appearances from {path}")
        return cls(npcs)
