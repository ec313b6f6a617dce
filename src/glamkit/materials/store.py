"""
Per-row color overrides keyed by `MaterialValueIndex`.

Entries are kept sorted by packed key so that everything belonging to a
draw object, slot or material can be read or dropped with one range scan
between `MaterialValueIndex.min_index(...)` and `max_index(...)`.
Persisted as a JSON object mapping the bare integer key to the row values.
"""

import bisect
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, cast

import orjson

from .color_table import ColorRow
from .index import InvalidMaterialKeyError, MaterialValueIndex, index_from_json_value


class MaterialValueStore:
    """Sorted mapping from valid indices to color rows."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._keys: List[int] = []
        self._values: Dict[int, ColorRow] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, index: object) -> bool:
        return isinstance(index, MaterialValueIndex) and index.key in self._values

    def __iter__(self) -> Iterator[Tuple[MaterialValueIndex, ColorRow]]:
        for key in self._keys:
            yield MaterialValueIndex.from_raw_key(key), self._values[key]

    def set(self, index: MaterialValueIndex, row: ColorRow) -> None:
        """Insert or replace the override for an index.

        Raises:
            InvalidMaterialKeyError: if the index is not valid.
        """
        if not index.valid:
            raise InvalidMaterialKeyError(index.key)
        key = index.key
        if key not in self._values:
            bisect.insort(self._keys, key)
        self._values[key] = row

    def get(self, index: MaterialValueIndex) -> Optional[ColorRow]:
        return self._values.get(index.key)

    def remove(self, index: MaterialValueIndex) -> bool:
        """Drop one entry. Returns True if something was removed."""
        key = index.key
        if key not in self._values:
            return False
        del self._values[key]
        self._keys.pop(bisect.bisect_left(self._keys, key))
        return True

    def _bounds(self, low: MaterialValueIndex, high: MaterialValueIndex) -> Tuple[int, int]:
        start = bisect.bisect_left(self._keys, low.key)
        end = bisect.bisect_right(self._keys, high.key)
        return start, max(start, end)

    def values_in_range(
        self, low: MaterialValueIndex, high: MaterialValueIndex
    ) -> List[Tuple[MaterialValueIndex, ColorRow]]:
        """All entries with `low.key <= key <= high.key`, in key order."""
        start, end = self._bounds(low, high)
        return [
            (MaterialValueIndex.from_raw_key(key), self._values[key])
            for key in self._keys[start:end]
        ]

    def remove_range(self, low: MaterialValueIndex, high: MaterialValueIndex) -> int:
        """Drop every entry in the inclusive range; returns how many were removed."""
        start, end = self._bounds(low, high)
        for key in self._keys[start:end]:
            del self._values[key]
        del self._keys[start:end]
        return end - start

    def clear(self) -> None:
        self._keys.clear()
        self._values.clear()

    # === PERSISTENCE ===

    def to_json(self) -> bytes:
        data = {key: self._values[key].to_list() for key in self._keys}
        return orjson.dumps(data, option=orjson.OPT_NON_STR_KEYS)

    @classmethod
    def from_json(cls, data: bytes | str) -> "MaterialValueStore":
        """Load a store; any invalid key fails the whole load.

        Raises:
            InvalidMaterialKeyError: for keys that are not valid indices.
            ValueError: for malformed documents.
        """
        parsed = orjson.loads(data)
        if not isinstance(parsed, dict):
            raise ValueError("Material value document must be a JSON object")

        store = cls()
        for raw_key, raw_row in cast(Dict[str, Any], parsed).items():
            # Keys are written as bare decimal integers and nothing else.
            if not (raw_key.isascii() and raw_key.isdigit()):
                raise InvalidMaterialKeyError(raw_key)
            index = index_from_json_value(int(raw_key))
            if not isinstance(raw_row, list):
                raise ValueError(f"Row for {index} must be a list of numbers")
            try:
                values = tuple(float(v) for v in cast(List[Any], raw_row))
            except (TypeError, ValueError) as e:
                raise ValueError(f"Row for {index} must be a list of numbers") from e
            store.set(index, ColorRow(values))

        store.logger.debug(f"Loaded {len(store)} material values")
        return store

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            f.write(self.to_json())
        self.logger.info(f"Saved {len(self)} material values to {path}")

    @classmethod
    def load(cls, path: str | Path) -> "MaterialValueStore":
        with Path(path).open("rb") as f:
            return cls.from_json(f.read())
