"""
Access to exported game sheets.

Each sheet is one JSON file under `<root>/sheets/`. Sheets are parsed
with orjson on first use and cached; several customization tasks may ask
for the same sheet at once, so the cache is guarded by a lock.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, cast

import orjson

from .models import Sheet, SheetRow, GameDataError, SHEETS_DIR


class GameDataSource:
    """Read-only provider of game sheets from an export directory."""

    def __init__(self, root: str | Path):
        """Initialize the source.

        Args:
            root: Export directory; must contain a `sheets/` folder.

        Raises:
            GameDataError: if the directory layout is missing.
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.root = Path(root)
        self.sheets_path = self.root / SHEETS_DIR
        if not self.sheets_path.is_dir():
            raise GameDataError(f"Sheets directory not found: {self.sheets_path}")

        self._cache: Dict[str, Sheet] = {}
        self._lock = threading.Lock()
        self.logger.info(f"Initializing GameDataSource with path: {self.root}")

    def sheet_names(self) -> List[str]:
        """Names of all sheets present in the export, sorted."""
        return sorted(p.stem for p in self.sheets_path.glob("*.json"))

    def has_sheet(self, name: str) -> bool:
        return (self.sheets_path / f"{name}.json").is_file()

    def get_sheet(self, name: str) -> Sheet:
        """Return all rows of a sheet.

        Missing or unreadable sheets are logged and come back empty so that
        one broken file does not take the rest of the data down with it.
        """
        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached

            sheet = self._read_sheet(name)
            self._cache[name] = sheet
            return sheet

    def _read_sheet(self, name: str) -> Sheet:
        sheet_file = self.sheets_path / f"{name}.json"
        if not sheet_file.is_file():
            self.logger.warning(f"Sheet not found: {name}")
            return []

        try:
            with sheet_file.open("rb") as f:
                data = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            self.logger.error(f"Error reading sheet {sheet_file}: {e}")
            return []

        raw_rows: List[Any] = data if isinstance(data, list) else [data]
        rows: Sheet = [cast(SheetRow, row) for row in raw_rows if isinstance(row, dict)]
        skipped = len(raw_rows) - len(rows)
        if skipped:
            self.logger.debug(f"Skipped {skipped} non-object rows in sheet {name}")

        self.logger.debug(f"Loaded sheet {name} with {len(rows)} rows")
        return rows

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
