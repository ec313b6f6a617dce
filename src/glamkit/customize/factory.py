"""
Shared precomputation for customization sets.

Creating the factory parses the character creation sheets and the NPC
table once; `create_set` then only assembles already indexed data, so it
is safe and cheap to call from many threads at once.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, List, Set, Tuple, cast

from ..game_data.enums import CustomizeIndex, Gender, SubRace
from ..game_data.icons import IconStorage
from ..game_data.models import (
    CHARA_MAKE_CUSTOMIZE_SHEET,
    CHARA_MAKE_TYPE_SHEET,
    SheetRow,
)
from ..game_data.npcs import NpcCustomizeSet
from ..game_data.sources import GameDataSource
from .models import CustomizeData, CustomizeSet

GroupKey = Tuple[SubRace, Gender]

# Customizations that identify the group rather than describe an appearance.
_GROUP_INDICES = frozenset({CustomizeIndex.RACE, CustomizeIndex.GENDER, CustomizeIndex.CLAN})


class CustomizeSetFactory:
    """Build `CustomizeSet` objects from indexed game data.

    Sheet layout read here:

    * `CharaMakeType`: one row per clan and gender (`tribe`, zero based
      `gender`) with a `menus` list. Each menu has `index` (customization
      name), `name`, and either `values` (with optional parallel `icons`)
      or `features` (row ids of `CharaMakeCustomize`).
    * `CharaMakeCustomize`: feature rows with `id`, `data` (the value) and
      `icon`.
    """

    def __init__(
        self,
        game_data: GameDataSource,
        log: logging.Logger,
        icons: IconStorage,
        npc_customize_set: NpcCustomizeSet,
    ):
        self._log = log
        self._icons = icons
        self._features = self._index_features(game_data.get_sheet(CHARA_MAKE_CUSTOMIZE_SHEET))
        self._menus = self._index_menus(game_data.get_sheet(CHARA_MAKE_TYPE_SHEET))
        self._npc_values = self._index_npcs(npc_customize_set)

        self._log.debug(
            f"Customization factory ready: {len(self._menus)} groups, "
            f"{len(self._features)} features, {len(self._npc_values)} NPC groups"
        )

    @staticmethod
    def _index_features(rows: List[SheetRow]) -> Dict[int, SheetRow]:
        features: Dict[int, SheetRow] = {}
        for row in rows:
            row_id = row.get("id")
            if isinstance(row_id, int):
                features[row_id] = row
        return features

    def _index_menus(self, rows: List[SheetRow]) -> Dict[GroupKey, List[SheetRow]]:
        menus: Dict[GroupKey, List[SheetRow]] = {}
        for row in rows:
            try:
                clan = SubRace(int(row.get("tribe", 0)))
                gender = Gender(int(row.get("gender", -1)) + 1)
            except (TypeError, ValueError):
                self._log.warning(f"Skipping chara make row with bad group: {row.get('id')}")
                continue
            raw_menus = cast(List[Any], row.get("menus") or [])
            menus[(clan, gender)] = [
                cast(SheetRow, menu) for menu in raw_menus if isinstance(menu, dict)
            ]
        return menus

    @staticmethod
    def _index_npcs(npcs: NpcCustomizeSet) -> Dict[GroupKey, Dict[CustomizeIndex, Set[int]]]:
        values: Dict[GroupKey, Dict[CustomizeIndex, Set[int]]] = defaultdict(
            lambda: defaultdict(set)
        )
        for npc in npcs:
            group = (npc.clan, npc.gender)
            for index, value in npc.customize.items():
                if index not in _GROUP_INDICES:
                    values[group][index].add(value)
        return values

    def _menu_options(self, index: CustomizeIndex, menu: SheetRow) -> List[CustomizeData]:
        feature_ids = menu.get("features")
        if isinstance(feature_ids, list):
            options: List[CustomizeData] = []
            for feature_id in cast(List[Any], feature_ids):
                feature = self._features.get(feature_id)
                if feature is None:
                    self._log.debug(f"Missing feature row {feature_id} for {index.name}")
                    continue
                options.append(
                    CustomizeData(index, int(feature.get("data", 0)), int(feature.get("icon", 0)))
                )
            return options

        raw_values = cast(List[Any], menu.get("values") or [])
        raw_icons = cast(List[Any], menu.get("icons") or [])
        return [
            CustomizeData(index, int(value), int(raw_icons[i]) if i < len(raw_icons) else 0)
            for i, value in enumerate(raw_values)
        ]

    def create_set(self, clan: SubRace, gender: Gender) -> CustomizeSet:
        """Assemble the set for one clan and gender."""
        name = f"{clan.to_name()} {gender.to_name()}"
        menus = self._menus.get((clan, gender))
        if menus is None:
            self._log.warning(f"No character creation data for {name}")
            menus = []

        options: Dict[CustomizeIndex, List[CustomizeData]] = {}
        menu_names: Dict[CustomizeIndex, str] = {}
        for menu in menus:
            try:
                index = CustomizeIndex.from_name(str(menu.get("index", "")))
            except ValueError as e:
                self._log.debug(f"{name}: {e}")
                continue
            options[index] = self._menu_options(index, menu)
            menu_names[index] = str(menu.get("name") or "")

        npc_options: Set[Tuple[CustomizeIndex, int]] = set()
        for index, values in self._npc_values.get((clan, gender), {}).items():
            player_values = {entry.value for entry in options.get(index, [])}
            npc_options.update((index, value) for value in values - player_values)

        missing_icons = sum(
            1
            for entries in options.values()
            for entry in entries
            if entry.icon_id and not self._icons.has_icon(entry.icon_id)
        )
        if missing_icons:
            self._log.debug(f"{name}: {missing_icons} option icons missing")

        return CustomizeSet(
            clan=clan,
            gender=gender,
            name=name,
            options=options,
            menu_names=menu_names,
            npc_options=frozenset(npc_options),
        )
